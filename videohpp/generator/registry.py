"""Type registry and per-category entity tables."""

from typing import Generic, TypeVar

from .errors import DuplicateDefinitionError, DuplicateTypeError
from .types import (
    DefineData,
    EnumData,
    ExternalTypeData,
    IncludeData,
    StructureData,
    TypeCategory,
    TypeDescriptor,
)


def _label(category: TypeCategory) -> str:
    if category in (TypeCategory.STRUCT, TypeCategory.ENUM, TypeCategory.DEFINE):
        return str(category)
    return "type"


class TypeRegistry:
    """Map from type name to its descriptor. Entries are never removed."""

    def __init__(self) -> None:
        self.types: dict[str, TypeDescriptor] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.types

    def declare(self, name: str, category: TypeCategory, line: int) -> TypeDescriptor:
        """Declare a new type, failing if the name is already taken."""
        if name in self.types:
            raise DuplicateTypeError(f"{_label(category)} <{name}> already specified", line)
        descriptor = TypeDescriptor(name=name, category=category, line=line)
        self.types[name] = descriptor
        return descriptor

    def lookup(self, name: str) -> TypeDescriptor | None:
        return self.types.get(name)

    def category_of(self, name: str) -> TypeCategory | None:
        descriptor = self.types.get(name)
        return descriptor.category if descriptor else None


TEntity = TypeVar("TEntity")


class EntityTable(Generic[TEntity]):
    """Detail table for one type category, keyed by type name."""

    def __init__(self, registry: TypeRegistry, category: TypeCategory):
        self.registry = registry
        self.category = category
        self.items: dict[str, TEntity] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.items

    def __getitem__(self, name: str) -> TEntity:
        return self.items[name]

    def get(self, name: str) -> TEntity | None:
        return self.items.get(name)

    def insert(self, name: str, item: TEntity, line: int) -> TEntity:
        """Insert the definition of a type declared with this table's category."""
        if name in self.items:
            raise DuplicateDefinitionError(f"{_label(self.category)} <{name}> already defined", line)
        if self.registry.category_of(name) != self.category:
            raise DuplicateDefinitionError(
                f"{_label(self.category)} <{name}> is not declared as {self.category}", line
            )
        self.items[name] = item
        return item


class EntityTables:
    """The detail tables backing a TypeRegistry."""

    def __init__(self, registry: TypeRegistry):
        self.defines: EntityTable[DefineData] = EntityTable(registry, TypeCategory.DEFINE)
        self.enums: EntityTable[EnumData] = EntityTable(registry, TypeCategory.ENUM)
        self.external_types: EntityTable[ExternalTypeData] = EntityTable(
            registry, TypeCategory.EXTERNAL_TYPE
        )
        self.includes: EntityTable[IncludeData] = EntityTable(registry, TypeCategory.INCLUDE)
        self.structs: EntityTable[StructureData] = EntityTable(registry, TypeCategory.STRUCT)
