"""Custom mappers: wire delegates into a mapper through generated setters.

This module demonstrates:

1. The setter naming convention ``set_custom_mapper_<snake_case type name>``.
2. Fallback to an ancestor's setter when only the base type is declared.
3. Custom mappers being part of the cache key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mapwire import MapperRegistry


class EmailFormatter:
    def format(self, email: str) -> str:
        return email.lower()


class MaskingEmailFormatter(EmailFormatter):
    def format(self, email: str) -> str:
        local, _, domain = email.lower().partition("@")
        return f"{local[0]}***@{domain}"


class ContactMapper(ABC):
    @abstractmethod
    def email(self, raw: str) -> str: ...


class ContactMapperImpl(ContactMapper):
    def __init__(self) -> None:
        self._email_formatter = EmailFormatter()

    def set_custom_mapper_email_formatter(self, email_formatter: EmailFormatter) -> None:
        self._email_formatter = email_formatter

    def email(self, raw: str) -> str:
        return self._email_formatter.format(raw)


def main() -> None:
    registry = MapperRegistry()

    plain = registry.resolve(ContactMapper)
    print(f"plain={plain.email('Ada@Example.COM')}")  # => plain=ada@example.com

    masking = MaskingEmailFormatter()
    masked = registry.resolve_with_custom(ContactMapper, masking)
    print(f"masked={masked.email('Ada@Example.COM')}")  # => masked=a***@example.com

    print(f"distinct_instances={plain is not masked}")  # => distinct_instances=True

    again = registry.resolve(ContactMapper, None, [masking]) is masked
    print(f"same_custom_same_instance={again}")  # => same_custom_same_instance=True


if __name__ == "__main__":
    main()
