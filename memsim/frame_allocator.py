"""Shared physical frame allocator with round-robin eviction."""

from __future__ import annotations

import threading
from contextlib import nullcontext
from dataclasses import dataclass

from memsim.model import Process


@dataclass
class _FrameOwner:
    process: Process
    vpn: int


class FrameAllocator:
    """Hands out physical frames, evicting in round-robin order when full.

    Evicting a frame invalidates the previous owner's page-table entry and
    TLB entry for the page that lived there.
    """

    def __init__(self, frames: int) -> None:
        if frames < 1:
            raise ValueError("number of frames must be at least 1")
        self.frames = frames
        self._owners: list[_FrameOwner | None] = [None] * frames
        self._next_free = 0
        self._victim = 0
        self._lock = threading.Lock()

    def request(self, process: Process) -> int:
        """Return a frame for ``process.last_vpn_requested``."""
        guard = nullcontext() if process.config.unsafe else self._lock
        with guard:
            if self._next_free < self.frames:
                frame = self._next_free
                self._next_free += 1
            else:
                frame = self._victim
                victim = self._owners[frame]
                if victim is not None:
                    victim.process.table[victim.vpn].valid = False
                    if victim.process.tlb is not None:
                        victim.process.tlb.invalidate(victim.vpn)
                process.metrics.evictions += 1
                self._victim = (self._victim + 1) % self.frames

            self._owners[frame] = _FrameOwner(process, process.last_vpn_requested)
            return frame