"""Lock modes: at-most-once construction under concurrent resolution.

This module demonstrates:

1. ``LockMode.KEY`` (default) building one instance per key across threads.
2. ``LockMode.GLOBAL`` giving the same guarantee with one registry-wide lock.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from mapwire import LockMode, MapperRegistry


class SlowMapper:
    pass


class SlowMapperImpl(SlowMapper):
    constructed = 0
    lock = threading.Lock()

    def __init__(self) -> None:
        with SlowMapperImpl.lock:
            SlowMapperImpl.constructed += 1
        threading.Event().wait(0.05)


def _stats(lock_mode: LockMode) -> tuple[int, bool]:
    SlowMapperImpl.constructed = 0
    registry = MapperRegistry(lock_mode=lock_mode)
    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda _: registry.resolve(SlowMapper), range(16)))
    return SlowMapperImpl.constructed, all(r is results[0] for r in results)


def main() -> None:
    constructed, shared = _stats(LockMode.KEY)
    print(f"key_constructed={constructed}")  # => key_constructed=1
    print(f"key_shared={shared}")  # => key_shared=True

    constructed, shared = _stats(LockMode.GLOBAL)
    print(f"global_constructed={constructed}")  # => global_constructed=1
    print(f"global_shared={shared}")  # => global_shared=True


if __name__ == "__main__":
    main()
