import json

import pytest

from memsim.frame_allocator import FrameAllocator
from memsim.model import Config, Metrics
from memsim.paging import PageTable
from memsim.segmentation import SegmentTable
from memsim.simulator import (
    build_processes,
    main,
    parse_args,
    run_process,
    write_summary,
)
from memsim.tlb import Tlb


def _no_delay(_seconds):
    return None


def test_parse_args_defaults():
    assert parse_args([]) == Config()


def test_parse_args_known_flags():
    config = parse_args(
        [
            "--mode", "seg",
            "--threads", "2",
            "--ops_per_thread", "50",
            "--workload", "80-20",
            "--seed", "7",
            "--unsafe",
            "--frames", "8",
            "--pages", "16",
        ]
    )
    assert config.mode == "seg"
    assert config.threads == 2
    assert config.ops_per_thread == 50
    assert config.workload == "80-20"
    assert config.seed == 7
    assert config.unsafe is True
    assert config.frames == 8
    assert config.pages == 16


def test_parse_args_ignores_unknown_flags():
    config = parse_args(["--stats", "--tlb-size", "32", "--threads", "3"])
    assert config.threads == 3
    assert config.tlb_size == Config().tlb_size


def test_parse_args_rejects_non_integer():
    with pytest.raises(SystemExit):
        parse_args(["--threads", "many"])


def test_build_processes_page_mode():
    config = Config(threads=3, pages=10, tlb_size=4)
    processes = build_processes(config)
    assert [p.id for p in processes] == [0, 1, 2]
    for process in processes:
        assert isinstance(process.table, PageTable)
        assert len(process.table) == 10
        assert isinstance(process.tlb, Tlb)
        assert process.tlb.size == 4
        assert process.config is config


def test_build_processes_segment_mode():
    processes = build_processes(Config(mode="seg", threads=2))
    assert len(processes) == 2
    for process in processes:
        assert isinstance(process.table, SegmentTable)
        assert process.tlb is None
        bases = [s.base for s in process.table.segments]
        limits = [s.limit for s in process.table.segments]
        assert bases == [0, 1024, 2048, 3072]
        assert limits == [256, 256, 256, 256]


def test_run_process_segment_mode_counts_faults():
    config = Config(mode="seg", threads=1, ops_per_thread=1000)
    (process,) = build_processes(config)
    metrics = run_process(process, None)
    assert 0 < metrics.segfaults <= config.ops_per_thread
    assert metrics.tlb_hits == 0
    assert metrics.page_faults == 0


def test_run_process_is_deterministic():
    config = Config(mode="seg", threads=1, ops_per_thread=500, seed=11)
    first = run_process(build_processes(config)[0], None)
    second = run_process(build_processes(config)[0], None)
    assert first == second


def test_run_process_paging_without_evictions():
    config = Config(threads=1, ops_per_thread=300, pages=8, frames=16, tlb_size=4)
    (process,) = build_processes(config)
    delays = []
    metrics = run_process(process, FrameAllocator(config.frames), delays.append)
    assert metrics.evictions == 0
    assert 0 < metrics.page_faults <= config.pages
    assert metrics.tlb_hits + metrics.page_faults <= config.ops_per_thread
    assert len(delays) == metrics.page_faults
    assert all(0.001 <= d < 0.005 for d in delays)


def test_run_process_thrashing_evicts():
    config = Config(threads=1, ops_per_thread=200, pages=8, frames=1, tlb_size=2)
    (process,) = build_processes(config)
    metrics = run_process(process, FrameAllocator(config.frames), _no_delay)
    assert metrics.page_faults > 1
    assert metrics.evictions == metrics.page_faults - 1


def test_run_process_paging_requires_allocator():
    (process,) = build_processes(Config(threads=1, ops_per_thread=5))
    with pytest.raises(ValueError):
        run_process(process, None, _no_delay)


def test_write_summary_contents(tmp_path):
    path = tmp_path / "summary.json"
    metrics = Metrics(tlb_hits=5, page_faults=3, evictions=1, segfaults=0)
    write_summary(Config(mode="page"), metrics, 1.23456, 2000.0, path)
    data = json.loads(path.read_text())
    assert data["mode"] == "page"
    assert data["metrics"] == {
        "tlb_hits": 5,
        "page_faults": 3,
        "evictions": 1,
        "segfaults": 0,
    }
    text = path.read_text()
    assert '"runtime_sec": 1.235,' in text
    assert '"throughput_ops_sec": 2000.00' in text


def test_main_writes_summary(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "out").mkdir()
    code = main(["--mode", "seg", "--threads", "2", "--ops_per_thread", "100"])
    assert code == 0
    data = json.loads((tmp_path / "out" / "summary.json").read_text())
    assert data["mode"] == "seg"
    assert 0 < data["metrics"]["segfaults"] <= 200
    output = capsys.readouterr().out
    assert "Thread 0" in output
    assert "Thread 1" in output


def test_main_paging_run(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "out").mkdir()
    code = main(
        ["--threads", "2", "--ops_per_thread", "20", "--pages", "4", "--frames", "16"]
    )
    assert code == 0
    data = json.loads((tmp_path / "out" / "summary.json").read_text())
    assert data["mode"] == "page"
    assert data["metrics"]["evictions"] == 0
    assert 0 < data["metrics"]["page_faults"] <= 8


def test_main_without_output_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    code = main(["--mode", "seg", "--threads", "1", "--ops_per_thread", "10"])
    assert code == 0
    assert not (tmp_path / "out" / "summary.json").exists()