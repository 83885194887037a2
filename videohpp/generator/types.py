"""Type definitions for video registry parsing and code generation."""

from dataclasses import dataclass, field
from enum import StrEnum, auto

from dataclasses_json import DataClassJsonMixin


class TypeCategory(StrEnum):
    """Classification of a name declared in the types section."""

    STRUCT = auto()
    ENUM = auto()
    EXTERNAL_TYPE = auto()
    INCLUDE = auto()
    DEFINE = auto()
    UNKNOWN = auto()


@dataclass
class TypeDescriptor(DataClassJsonMixin):
    """Represents an entry of the type registry.

    ``required_by`` holds the names of the extensions that pulled the type
    into scope; it is filled while reading require blocks and while injecting
    implicitly required structs.
    """

    name: str
    category: TypeCategory
    line: int
    required_by: set[str] = field(default_factory=set)


@dataclass
class TypeInfo(DataClassJsonMixin):
    """Represents a C type reference with its qualifiers, e.g. ``const Foo *``."""

    prefix: str
    type: str
    postfix: str


@dataclass
class ConstantData(DataClassJsonMixin):
    """Represents a named constant declared by an extension."""

    name: str
    type: str
    value: str
    line: int


@dataclass
class DefineData(DataClassJsonMixin):
    """Represents a preprocessor define and the define it depends on."""

    name: str
    require: str | None
    line: int


@dataclass
class IncludeData(DataClassJsonMixin):
    """Represents an include file."""

    name: str
    line: int


@dataclass
class ExternalTypeData(DataClassJsonMixin):
    """Represents a type defined by an include file."""

    name: str
    require: str
    line: int


@dataclass
class EnumAlias(DataClassJsonMixin):
    """Represents an alternate, deprecated name of an enum value."""

    name: str
    line: int


@dataclass
class EnumValueData(DataClassJsonMixin):
    """Represents a single enum value and its aliases."""

    name: str
    value: str
    line: int
    aliases: list[EnumAlias] = field(default_factory=list)


@dataclass
class EnumData(DataClassJsonMixin):
    """Represents an enum type.

    Values stay empty until the matching ``<enums>`` block is read.
    """

    name: str
    line: int
    values: list[EnumValueData] = field(default_factory=list)


@dataclass
class MemberData(DataClassJsonMixin):
    """Represents a member of a struct.

    ``array_sizes`` holds one entry per dimension, either a decimal literal or
    the name of a constant. ``bit_count`` is set for bit-field members.
    """

    name: str
    type: TypeInfo
    line: int
    array_sizes: list[str] = field(default_factory=list)
    bit_count: str | None = None
    len: str | None = None
    optional: str | None = None


@dataclass
class StructureData(DataClassJsonMixin):
    """Represents a struct type definition, members in declaration order."""

    name: str
    line: int
    members: list[MemberData] = field(default_factory=list)


@dataclass
class RequireData(DataClassJsonMixin):
    """Represents the types and constants an extension pulls into scope."""

    line: int = 0
    types: list[str] = field(default_factory=list)
    constants: dict[str, ConstantData] = field(default_factory=dict)


@dataclass
class ExtensionData(DataClassJsonMixin):
    """Represents an extension.

    ``protect`` is the conditional-compilation guard token, ``depends`` the
    name of the single extension this one builds upon.
    """

    name: str
    number: int
    protect: str
    line: int
    depends: str | None = None
    require: RequireData = field(default_factory=RequireData)


@dataclass
class VideoRegistry(DataClassJsonMixin):
    """Represents a completely read, resolved and checked video registry."""

    copyright: str
    types: dict[str, TypeDescriptor]
    defines: dict[str, DefineData]
    enums: dict[str, EnumData]
    external_types: dict[str, ExternalTypeData]
    includes: dict[str, IncludeData]
    structs: dict[str, StructureData]
    extensions: list[ExtensionData]

    def category_of(self, name: str) -> TypeCategory | None:
        """Return the category of a declared type, or None if unknown."""
        descriptor = self.types.get(name)
        return descriptor.category if descriptor else None

    def find_extension(self, name: str | None) -> ExtensionData | None:
        """Return the extension called ``name``, or None."""
        return next((ext for ext in self.extensions if ext.name == name), None)
