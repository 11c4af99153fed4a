from __future__ import annotations

from enum import Enum


class LockMode(str, Enum):
    """Select locking behavior for the singleton mapper cache.

    Both modes guarantee that a mapper is constructed at most once per
    resolution key and that no caller observes a partially wired instance.
    They differ in how much unrelated work they serialize.
    """

    KEY = "key"
    """Guard each resolution key with its own ``threading.Lock``.

    Resolutions of different keys proceed in parallel.
    """

    GLOBAL = "global"
    """Guard every cache miss with one registry-wide ``threading.RLock``.

    Only one mapper is constructed at a time across the registry.
    """


__all__ = ["LockMode"]
