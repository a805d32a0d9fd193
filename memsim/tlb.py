"""Per-process translation lookaside buffer with FIFO replacement."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TlbEntry:
    """One cached translation."""

    vpn: int = 0
    frame: int = 0
    valid: bool = False


class Tlb:
    """Fixed-size TLB whose slots are replaced in FIFO order."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("TLB size must be at least 1")
        self.entries = [TlbEntry() for _ in range(size)]
        self.next_replace = 0

    @property
    def size(self) -> int:
        return len(self.entries)

    def contains(self, vpn: int) -> bool:
        """Return whether a valid entry maps ``vpn``."""
        return any(entry.valid and entry.vpn == vpn for entry in self.entries)

    def frame_for(self, vpn: int) -> int:
        """Return the frame stored for ``vpn``, or 0 if none is stored."""
        return next((entry.frame for entry in self.entries if entry.vpn == vpn), 0)

    def update(self, vpn: int, frame: int) -> None:
        """Store a translation in the next FIFO slot."""
        entry = self.entries[self.next_replace]
        entry.vpn = vpn
        entry.frame = frame
        entry.valid = True
        self.next_replace = (self.next_replace + 1) % self.size

    def invalidate(self, vpn: int) -> None:
        """Mark every valid entry for ``vpn`` invalid."""
        for entry in self.entries:
            if entry.valid and entry.vpn == vpn:
                entry.valid = False