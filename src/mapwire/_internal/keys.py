from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ResolutionKey:
    """Identify one cached mapper by interface, sources, and custom mappers.

    Sources and custom mappers are captured through their ``repr`` of the
    ordered list, so two requests with equal values (or the same objects, for
    types keeping the default identity-based ``repr``) share a key. ``None``
    records an absent list, which is distinct from an empty one.
    """

    identity: str
    """Canonical dotted name of the mapper interface."""
    arguments: str | None
    """Textual form of the constructor sources, ``None`` when absent."""
    delegates: str | None
    """Textual form of the custom mappers, ``None`` when absent."""

    @classmethod
    def derive(
        cls,
        identity: str,
        arguments: Sequence[Any] | None,
        delegates: Sequence[Any] | None,
    ) -> ResolutionKey:
        """Build the key for a resolution request.

        Args:
            identity: Canonical dotted name of the mapper interface.
            arguments: Ordered constructor sources, or ``None`` for default construction.
            delegates: Ordered custom mappers, or ``None`` when there are none.

        """
        return cls(
            identity=identity,
            arguments=None if arguments is None else repr(list(arguments)),
            delegates=None if delegates is None else repr(list(delegates)),
        )

    def __str__(self) -> str:
        return f"{self.identity}-{self.arguments}-{self.delegates}"


__all__ = ["ResolutionKey"]
