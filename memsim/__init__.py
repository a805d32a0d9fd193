"""Virtual memory simulator: paging with a TLB and frame eviction, and segmentation."""

__version__ = "0.1.0"