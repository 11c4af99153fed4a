from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from mapwire._internal.keys import ResolutionKey
from mapwire._internal.lock_mode import LockMode
from mapwire.exceptions import MapwireConfigurationError

logger = logging.getLogger(__name__)
_MISSING: Any = object()


@dataclass(slots=True)
class _KeyLock:
    """Construction lock of one key and the number of threads holding or awaiting it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class SingletonCache:
    """Hold one mapper instance per resolution key for the lifetime of the owner.

    The cache only supports lookup and insert-if-absent. An entry becomes
    visible after its factory has returned, so callers never observe a mapper
    that is still being constructed or wired. A factory that raises leaves no
    entry behind and the next request for the same key runs it again.

    Every thread records the key it is building and the key it is waiting
    for. A request that would wait, directly or through other threads, on a
    key its own thread is building is rejected as a circular resolution
    instead of blocking forever.
    """

    def __init__(self, lock_mode: LockMode = LockMode.KEY) -> None:
        self._lock_mode = lock_mode
        self._instances: dict[ResolutionKey, Any] = {}
        self._global_lock = threading.RLock()
        # Guards the lock table and the owner/wait-for bookkeeping below.
        self._state_lock = threading.Lock()
        self._key_locks: dict[ResolutionKey, _KeyLock] = {}
        self._owners: dict[ResolutionKey, int] = {}
        self._waiting_for: dict[int, ResolutionKey] = {}

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    def __contains__(self, key: object) -> bool:
        return key in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def get(self, key: ResolutionKey, default: Any = None) -> Any:
        """Return the cached instance for ``key`` or ``default``."""
        return self._instances.get(key, default)

    def get_or_create(self, key: ResolutionKey, factory: Callable[[], Any]) -> Any:
        """Return the instance cached for ``key``, creating it with ``factory`` on a miss.

        Concurrent callers presenting the same key wait for the first one; the
        factory runs at most once per successful insertion.

        Args:
            key: Resolution key of the requested mapper.
            factory: Zero-argument callable building the fully wired mapper.

        Returns:
            The cached or newly created instance.

        Raises:
            MapwireConfigurationError: If waiting for ``key`` would close a
                cycle back to the calling thread, either because the thread is
                building ``key`` itself or because the thread building it is,
                directly or transitively, waiting on this one.

        """
        instance = self._instances.get(key, _MISSING)
        if instance is not _MISSING:
            logger.debug("Mapper cache hit for %s", key)
            return instance

        thread_id = threading.get_ident()
        lock = self._begin_wait(key, thread_id)
        try:
            with lock:
                with self._state_lock:
                    del self._waiting_for[thread_id]
                    self._owners[key] = thread_id
                try:
                    return self._create_if_missing(key, factory)
                finally:
                    with self._state_lock:
                        del self._owners[key]
        finally:
            self._end_wait(key, thread_id)

    def _create_if_missing(self, key: ResolutionKey, factory: Callable[[], Any]) -> Any:
        # Second check after acquiring the lock - another thread may have built it.
        instance = self._instances.get(key, _MISSING)
        if instance is not _MISSING:
            return instance

        logger.debug("Mapper cache miss for %s", key)
        instance = factory()
        self._instances[key] = instance
        return instance

    def _begin_wait(self, key: ResolutionKey, thread_id: int) -> threading.Lock | threading.RLock:
        with self._state_lock:
            self._check_wait_cycle(key, thread_id)
            self._waiting_for[thread_id] = key
            if self._lock_mode is LockMode.GLOBAL:
                return self._global_lock
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                key_lock = _KeyLock()
                self._key_locks[key] = key_lock
            key_lock.users += 1
            return key_lock.lock

    def _end_wait(self, key: ResolutionKey, thread_id: int) -> None:
        with self._state_lock:
            self._waiting_for.pop(thread_id, None)
            key_lock = self._key_locks.get(key)
            if key_lock is None:
                return
            key_lock.users -= 1
            # A new lock is only created once nobody holds or awaits this one.
            if key_lock.users == 0:
                del self._key_locks[key]

    def _check_wait_cycle(self, key: ResolutionKey, thread_id: int) -> None:
        """Walk the owner/wait-for chain starting at ``key``; must hold ``_state_lock``."""
        seen: set[int] = set()
        current: ResolutionKey | None = key
        while current is not None:
            owner = self._owners.get(current)
            if owner is None or owner in seen:
                return
            if owner == thread_id:
                msg = f"Circular resolution detected for mapper '{key.identity}'."
                raise MapwireConfigurationError(msg, type_name=key.identity)
            seen.add(owner)
            current = self._waiting_for.get(owner)


__all__ = ["SingletonCache"]
