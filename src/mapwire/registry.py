from mapwire._internal.registry import MapperBuilder, MapperRegistry

__all__ = ["MapperBuilder", "MapperRegistry"]
