"""Builder: accumulate sources and custom mappers, then build.

This module demonstrates:

1. ``with_sources`` values passed positionally to the generated constructor.
2. ``with_custom`` values wired through their setters.
3. ``build`` sharing the cache with ``resolve``.
"""

from __future__ import annotations

from mapwire import MapperRegistry


class Connection:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn

    def __repr__(self) -> str:
        return f"Connection({self.dsn!r})"


class CurrencyFormatter:
    def format(self, cents: int) -> str:
        return f"{cents / 100:.2f}"


class InvoiceMapper:
    pass


class InvoiceMapperImpl(InvoiceMapper):
    def __init__(self, connection: Connection, currency: str) -> None:
        self.connection = connection
        self.currency = currency
        self.formatter = CurrencyFormatter()

    def set_custom_mapper_currency_formatter(self, formatter: CurrencyFormatter) -> None:
        self.formatter = formatter

    def total(self, cents: int) -> str:
        return f"{self.formatter.format(cents)} {self.currency}"


def main() -> None:
    registry = MapperRegistry()
    connection = Connection("db://invoices")
    formatter = CurrencyFormatter()

    mapper = (
        registry.builder(InvoiceMapper)
        .with_sources(connection, "EUR")
        .with_custom(formatter)
        .build()
    )
    print(f"total={mapper.total(12345)}")  # => total=123.45 EUR
    print(f"dsn={mapper.connection.dsn}")  # => dsn=db://invoices

    same = registry.resolve(InvoiceMapper, [connection, "EUR"], [formatter]) is mapper
    print(f"shared_cache={same}")  # => shared_cache=True


if __name__ == "__main__":
    main()
