"""Address translation by paging, backed by a TLB and a frame allocator."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from memsim.frame_allocator import FrameAllocator
from memsim.model import Process


@dataclass
class PageTableEntry:
    """Mapping of one virtual page; ``valid`` means it is resident."""

    frame: int = 0
    valid: bool = False


class PageTable:
    """The page table of one process."""

    def __init__(self, num_pages: int) -> None:
        self.entries = [PageTableEntry() for _ in range(num_pages)]

    @property
    def num_pages(self) -> int:
        return len(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, vpn: int) -> PageTableEntry:
        if not 0 <= vpn < len(self.entries):
            raise IndexError(f"virtual page {vpn} outside the page table")
        return self.entries[vpn]


def translate_page(
    va: int,
    process: Process,
    allocator: FrameAllocator,
    delay: Callable[[float], object] = time.sleep,
) -> int:
    """Translate virtual address ``va`` to a physical address.

    A TLB hit returns at once; a page fault waits 1-5 ms of simulated disk
    latency through ``delay`` and obtains a frame from ``allocator``.
    """
    page_size = process.config.page_size
    vpn, offset = divmod(va, page_size)
    tlb = process.tlb

    if tlb.contains(vpn):
        process.metrics.tlb_hits += 1
        return tlb.frame_for(vpn) * page_size + offset

    entry = process.table[vpn]
    if not entry.valid:
        process.metrics.page_faults += 1
        process.last_vpn_requested = vpn
        delay((process.rng.randrange(4000) + 1000) / 1_000_000)
        entry.frame = allocator.request(process)
        entry.valid = True

    tlb.update(vpn, entry.frame)
    return entry.frame * page_size + offset