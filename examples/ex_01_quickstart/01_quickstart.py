"""Quickstart: resolve a generated mapper and get the same instance back.

This module demonstrates:

1. Declaring a mapper interface and the implementation a generator emits for it.
2. Resolving the mapper by interface class or by dotted name.
3. Singleton caching: equal requests return the identical instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mapwire import MapperRegistry


@dataclass(slots=True)
class User:
    name: str


@dataclass(slots=True)
class UserDto:
    display_name: str


class UserMapper(ABC):
    @abstractmethod
    def as_dto(self, user: User) -> UserDto: ...


class UserMapperImpl(UserMapper):
    def as_dto(self, user: User) -> UserDto:
        return UserDto(display_name=user.name.title())


def main() -> None:
    registry = MapperRegistry()

    mapper = registry.resolve(UserMapper)
    print(f"implementation={type(mapper).__name__}")  # => implementation=UserMapperImpl
    print(f"dto={mapper.as_dto(User(name='ada lovelace'))}")  # => dto=UserDto(display_name='Ada Lovelace')

    same = registry.resolve(UserMapper) is mapper
    print(f"same_instance={same}")  # => same_instance=True

    by_name = registry.resolve(f"{__name__}.UserMapper") is mapper
    print(f"by_name_same_instance={by_name}")  # => by_name_same_instance=True


if __name__ == "__main__":
    main()
