"""Command-line driver: runs one worker thread per simulated process."""

from __future__ import annotations

import argparse
import threading
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from memsim.frame_allocator import FrameAllocator
from memsim.model import Config, Metrics, Process
from memsim.paging import PageTable, translate_page
from memsim.segmentation import (
    SegmentationFault,
    SegmentEntry,
    SegmentTable,
    translate_segment,
)
from memsim.tlb import Tlb
from memsim.workloads import generate_address

PAGE_MODE = "page"
SEGMENT_COUNT = 4
SEGMENT_SPAN = 1024
SEGMENT_LIMIT = 256
SUMMARY_PATH = Path("out") / "summary.json"


def _build_parser() -> argparse.ArgumentParser:
    defaults = Config()
    parser = argparse.ArgumentParser(
        prog="memsim",
        description="Simulate paging or segmentation with concurrent processes.",
        allow_abbrev=False,
    )
    parser.add_argument("--mode", default=defaults.mode)
    parser.add_argument("--threads", type=int, default=defaults.threads)
    parser.add_argument(
        "--ops_per_thread", type=int, default=defaults.ops_per_thread
    )
    parser.add_argument("--workload", default=defaults.workload)
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--unsafe", action="store_true")
    parser.add_argument("--frames", type=int, default=defaults.frames)
    parser.add_argument("--pages", type=int, default=defaults.pages)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Config:
    """Build a configuration from command-line arguments; unknown ones are ignored."""
    namespace, _ = _build_parser().parse_known_args(argv)
    return Config(
        mode=namespace.mode,
        threads=namespace.threads,
        ops_per_thread=namespace.ops_per_thread,
        workload=namespace.workload,
        seed=namespace.seed,
        unsafe=namespace.unsafe,
        pages=namespace.pages,
        frames=namespace.frames,
    )


def build_processes(config: Config) -> list[Process]:
    """Create one process per thread, with tables suited to the mode."""
    processes = []
    for pid in range(config.threads):
        process = Process(id=pid, config=config)
        if config.mode == PAGE_MODE:
            process.table = PageTable(config.pages)
            process.tlb = Tlb(config.tlb_size)
        else:
            process.table = SegmentTable(
                [
                    SegmentEntry(base=seg * SEGMENT_SPAN, limit=SEGMENT_LIMIT)
                    for seg in range(SEGMENT_COUNT)
                ]
            )
        processes.append(process)
    return processes


def run_process(
    process: Process,
    allocator: FrameAllocator | None,
    delay: Callable[[float], object] = time.sleep,
) -> Metrics:
    """Perform the process's memory accesses and return its metrics."""
    config = process.config
    process.rng.seed(config.seed + process.id)
    paging = config.mode == PAGE_MODE
    if paging and allocator is None:
        raise ValueError("paging mode needs a frame allocator")

    for _ in range(config.ops_per_thread):
        va = generate_address(config, process.rng)
        if paging:
            translate_page(va, process, allocator, delay)
        else:
            seg_id = (va >> 10) % SEGMENT_COUNT
            offset = va % SEGMENT_SPAN
            try:
                translate_segment(seg_id, offset, process.table)
            except SegmentationFault:
                process.metrics.segfaults += 1
    return process.metrics


def write_summary(
    config: Config,
    metrics: Metrics,
    runtime: float,
    throughput: float,
    path: str | Path = SUMMARY_PATH,
) -> None:
    """Write the run's totals as JSON to ``path``."""
    text = (
        "{\n"
        f'  "mode": "{config.mode}",\n'
        '  "metrics": {\n'
        f'    "tlb_hits": {metrics.tlb_hits},\n'
        f'    "page_faults": {metrics.page_faults},\n'
        f'    "evictions": {metrics.evictions},\n'
        f'    "segfaults": {metrics.segfaults}\n'
        "  },\n"
        f'  "runtime_sec": {runtime:.3f},\n'
        f'  "throughput_ops_sec": {throughput:.2f}\n'
        "}\n"
    )
    Path(path).write_text(text, encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation, print a report and write the JSON summary."""
    config = parse_args(argv)
    processes = build_processes(config)
    allocator = FrameAllocator(config.frames) if config.mode == PAGE_MODE else None

    start = time.monotonic()
    workers = [
        threading.Thread(target=run_process, args=(process, allocator))
        for process in processes
    ]
    for worker in workers:
        worker.start()

    total = Metrics()
    print("\n--- Per-thread report ---")
    for worker, process in zip(workers, processes):
        worker.join()
        m = process.metrics
        print(
            f"Thread {process.id} | Hits: {m.tlb_hits} | "
            f"Faults: {m.page_faults} | SegF: {m.segfaults}"
        )
        total.merge(m)

    elapsed = time.monotonic() - start
    total_ops = config.threads * config.ops_per_thread
    throughput = total_ops / elapsed if elapsed > 0 else float("inf")

    print("\n==== SIMULATION FINISHED ====")
    print(f"Throughput: {throughput:.2f} ops/sec | Total time: {elapsed:.3f}s")

    try:
        write_summary(config, total, elapsed, throughput)
    except OSError:
        pass
    return 0