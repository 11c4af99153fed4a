from mapwire._internal.settings import MapwireSettings

__all__ = ["MapwireSettings"]
