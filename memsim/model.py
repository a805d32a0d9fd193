"""Shared simulation data: configuration, metrics and per-process context."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from memsim.paging import PageTable
    from memsim.segmentation import SegmentTable
    from memsim.tlb import Tlb


@dataclass
class Config:
    """Global simulation parameters."""

    mode: str = "page"
    threads: int = 4
    ops_per_thread: int = 1000
    workload: str = "uniform"
    seed: int = 42
    unsafe: bool = False
    pages: int = 64
    frames: int = 32
    page_size: int = 4096
    tlb_size: int = 16


@dataclass
class Metrics:
    """Event counters collected during a simulation."""

    tlb_hits: int = 0
    page_faults: int = 0
    evictions: int = 0
    segfaults: int = 0

    def merge(self, other: Metrics) -> Metrics:
        """Add the counts of ``other`` to these and return self."""
        self.tlb_hits += other.tlb_hits
        self.page_faults += other.page_faults
        self.evictions += other.evictions
        self.segfaults += other.segfaults
        return self


@dataclass(eq=False)
class Process:
    """State of one simulated process (one worker thread)."""

    id: int
    config: Config
    table: Union["PageTable", "SegmentTable", None] = None
    tlb: "Tlb | None" = None
    metrics: Metrics = field(default_factory=Metrics)
    last_vpn_requested: int = 0
    rng: random.Random = field(default_factory=random.Random)