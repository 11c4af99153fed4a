from mapwire._internal.lock_mode import LockMode

__all__ = ["LockMode"]
