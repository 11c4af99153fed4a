from __future__ import annotations


class MapwireError(Exception):
    """Base class of every error raised by mapwire.

    Resolution and registration failures surface as
    ``MapwireConfigurationError``; catching ``MapwireError`` also covers any
    error kind added later.
    """


class MapwireConfigurationError(MapwireError):
    """Signal that a mapper cannot be resolved, constructed, or wired.

    Raised by ``MapperRegistry.resolve`` and its variants, by
    ``MapperBuilder.build``, and by registration APIs when arguments are
    invalid. Typical triggers are a missing generated implementation, an
    ambiguous or mismatched constructor, a custom mapper without a matching
    setter, or an exception raised while constructing or wiring the mapper.

    The original exception, when there is one, is chained as ``__cause__``.

    Typical fixes include regenerating the mapper implementation, passing the
    sources its constructor expects, or declaring the custom mapper on the
    mapper interface so the generated setter exists.
    """

    def __init__(self, message: str, *, type_name: str | None = None) -> None:
        super().__init__(message)
        self.type_name = type_name
        """Name of the implementation or custom mapper type involved, if known."""


__all__ = ["MapwireConfigurationError", "MapwireError"]
