# memsim

memsim is a virtual memory simulator for teaching. Each worker thread stands
for one process. The process generates virtual addresses and translates them
to physical ones.

There are two modes:

- **page**: paging. Each process has its own FIFO TLB, and all processes share
  one pool of physical frames. A page that is not resident causes a page fault.
  The simulator then waits a simulated disk latency of 1–5 ms and asks the
  frame allocator for a frame. When every frame is in use, a victim frame is
  picked round-robin. Its previous owner's page-table entry and TLB entry for
  that page are invalidated, and the eviction is counted against the process
  that asked for the frame.
- **seg** (any mode other than `page`): segmentation. Each process has four
  segments with bases 0, 1024, 2048 and 3072 and a limit of 256 each. The
  segment number is `(va >> 10) % 4` and the offset is `va % 1024`. An offset
  at or past the limit counts as a segmentation fault.

There are two workloads:

- **uniform**: every page is equally likely. Any workload name other than
  `80-20` behaves this way.
- **80-20**: 80% of accesses go to the first `int(pages * 0.2 + 1)` pages.

## Installation

```
pip install .
```

## Command line

```
memsim --mode page --threads 4 --ops_per_thread 100
memsim --mode seg --threads 1 --workload uniform --seed 100
memsim --mode page --threads 8 --pages 64 --frames 8 --workload 80-20
```

| Option | Meaning | Default |
|---|---|---|
| `--mode` | `page`, or anything else for segmentation | `page` |
| `--threads` | number of simulated processes | 4 |
| `--ops_per_thread` | translations per process | 1000 |
| `--workload` | `uniform` or `80-20` | `uniform` |
| `--seed` | base random seed; process *n* uses `seed + n` | 42 |
| `--unsafe` | skip locking in the frame allocator | off |
| `--frames` | physical frames shared by all processes | 32 |
| `--pages` | virtual pages per process | 64 |

Options that are not in this table are ignored. The page size is always 4096
bytes and each TLB always holds 16 entries.

During a run, memsim prints one line per thread with its TLB hits, page
faults and segfaults. It then prints the throughput and the total time. It
also writes `out/summary.json` with the mode, the combined metrics
(`tlb_hits`, `page_faults`, `evictions`, `segfaults`), `runtime_sec` and
`throughput_ops_sec`.

## Library use

```python
from memsim.frame_allocator import FrameAllocator
from memsim.model import Config
from memsim.simulator import build_processes, run_process

config = Config(mode="page", threads=1, ops_per_thread=500)
allocator = FrameAllocator(config.frames)
process = build_processes(config)[0]
metrics = run_process(process, allocator, delay=lambda seconds: None)
print(metrics)
```

`run_process` seeds the process's random generator with `seed + id`. In paging
mode, it raises `ValueError` if no allocator is given. The `delay` argument is
called with the simulated latency in seconds; it defaults to `time.sleep`.

The building blocks can also be used on their own:

- `memsim.model`: `Config`, `Metrics` (with `merge`) and `Process`.
- `memsim.tlb.Tlb`: `contains`, `frame_for`, `update` and `invalidate`.
- `memsim.segmentation.translate_segment`: raises `SegmentationFault` when the
  offset is at or past the segment limit.
- `memsim.workloads.generate_address(config, rng)`.
- `memsim.paging.translate_page(va, process, allocator, delay)`, with
  `PageTable` and `PageTableEntry`.
- `memsim.frame_allocator.FrameAllocator.request(process)`.
- `memsim.simulator.write_summary(config, metrics, runtime, throughput, path)`.

## Limitations

- The command does not create the `out` directory. If `out` does not exist,
  no summary is written and no error is reported.
- The page size and the TLB size cannot be set from the command line. They can
  only be changed through `Config` when the package is used as a library.
- There is no option to choose the TLB replacement policy. It is always FIFO.