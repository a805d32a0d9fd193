"""Virtual address generators for the simulated workloads."""

from __future__ import annotations

import random

from memsim.model import Config

HOT_WORKLOAD = "80-20"


def generate_address(config: Config, rng: random.Random) -> int:
    """Return a virtual address drawn according to ``config.workload``.

    The "80-20" workload sends 80% of accesses to the first fifth of the
    pages; any other workload picks pages uniformly.
    """
    if config.workload == HOT_WORKLOAD and rng.randrange(100) < 80:
        hot_pages = int(config.pages * 0.2 + 1)
        vpn = rng.randrange(hot_pages)
        offset = rng.randrange(config.page_size)
        return vpn * config.page_size + offset

    vpn = rng.randrange(config.pages)
    offset = rng.randrange(config.page_size)
    return vpn * config.page_size + offset