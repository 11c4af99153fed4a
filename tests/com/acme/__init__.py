"""Mapper interfaces and the implementations a code generator would emit for them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import overload


@dataclass(frozen=True, slots=True)
class User:
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class UserDto:
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class Order:
    number: int


class Connection:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn

    def __repr__(self) -> str:
        return f"Connection({self.dsn!r})"


class EmailFormatter:
    def format(self, email: str) -> str:
        return email.lower()


class CustomEmailFormatter(EmailFormatter):
    def format(self, email: str) -> str:
        return f"<{email.lower()}>"


class AuditTrail:
    pass


class UserMapper(ABC):
    @abstractmethod
    def as_dto(self, user: User) -> UserDto: ...


class UserMapperImpl(UserMapper):
    def __init__(self) -> None:
        self.email_formatter: EmailFormatter | None = None

    def set_custom_mapper_email_formatter(self, email_formatter: EmailFormatter) -> None:
        self.email_formatter = email_formatter

    def as_dto(self, user: User) -> UserDto:
        email = user.email if self.email_formatter is None else self.email_formatter.format(user.email)
        return UserDto(name=user.name, email=email)


class OrderMapper(ABC):
    @abstractmethod
    def describe(self, order: Order) -> str: ...


class OrderMapperImpl(OrderMapper):
    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def describe(self, order: Order) -> str:
        return f"order #{order.number} via {self.connection.dsn}"


class AmbiguousMapper(ABC):
    pass


class AmbiguousMapperImpl(AmbiguousMapper):
    @overload
    def __init__(self) -> None: ...

    @overload
    def __init__(self, connection: Connection) -> None: ...

    def __init__(self, connection: Connection | None = None) -> None:
        self.connection = connection


class FailingMapper(ABC):
    pass


class FailingMapperImpl(FailingMapper):
    def __init__(self) -> None:
        msg = "generated constructor failed"
        raise RuntimeError(msg)


class NotAClassMapper(ABC):
    pass


def NotAClassMapperImpl() -> None:  # noqa: N802
    return None


class SetterFailureMapper(ABC):
    pass


class SetterFailureMapperImpl(SetterFailureMapper):
    def set_custom_mapper_email_formatter(self, email_formatter: EmailFormatter) -> None:
        msg = "formatter rejected"
        raise ValueError(msg)


class Mappers:
    """Namespace class holding nested mapper interfaces."""

    class NestedMapper(ABC):
        pass

    class NestedMapperImpl(NestedMapper):
        pass
