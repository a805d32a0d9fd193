"""Address translation by segmentation with limit checks."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SegmentEntry:
    """Base address and length of one segment."""

    base: int
    limit: int


@dataclass
class SegmentTable:
    """The segments of one process."""

    segments: list[SegmentEntry] = field(default_factory=list)

    @property
    def num_segments(self) -> int:
        return len(self.segments)


class SegmentationFault(Exception):
    """Raised when an offset lies outside its segment."""

    def __init__(self, seg_id: int, offset: int, limit: int) -> None:
        super().__init__(
            f"offset {offset} outside segment {seg_id} (limit {limit})"
        )
        self.seg_id = seg_id
        self.offset = offset
        self.limit = limit


def translate_segment(seg_id: int, offset: int, table: SegmentTable) -> int:
    """Return the physical address for ``offset`` within segment ``seg_id``."""
    entry = table.segments[seg_id]
    if offset >= entry.limit:
        raise SegmentationFault(seg_id, offset, entry.limit)
    return entry.base + offset