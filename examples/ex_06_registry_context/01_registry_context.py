"""RegistryContext: module-level helpers and explicit registrations.

This module demonstrates:

1. ``mapper_implementation`` publishing a generated class explicitly.
2. ``mapwire.resolve`` using the process-global ``registry_context``.
3. Rebinding the context and replaying recorded registrations.
"""

from __future__ import annotations

import mapwire
from mapwire import MapperRegistry, mapper_implementation, registry_context


class GreetingMapper:
    pass


@mapper_implementation("acme.generated.GreetingMapper")
class GeneratedGreetingMapper(GreetingMapper):
    def greet(self, name: str) -> str:
        return f"hello {name}"


def main() -> None:
    mapper = mapwire.resolve("acme.generated.GreetingMapper")
    print(f"greeting={mapper.greet('ada')}")  # => greeting=hello ada

    same = mapwire.builder("acme.generated.GreetingMapper").build() is mapper
    print(f"builder_same={same}")  # => builder_same=True

    isolated = MapperRegistry(discover_modules=False)
    registry_context.set_current(isolated)
    rebound = mapwire.resolve("acme.generated.GreetingMapper")
    print(f"replayed={isinstance(rebound, GeneratedGreetingMapper)}")  # => replayed=True
    print(f"new_registry_new_instance={rebound is not mapper}")  # => new_registry_new_instance=True


if __name__ == "__main__":
    main()
