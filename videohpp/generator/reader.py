"""Reader populating the type registry and entity tables from registry markup."""

import logging

from .errors import ValidationError
from .modifiers import parse_modifiers, read_type_info
from .registry import EntityTables, TypeRegistry
from .types import (
    ConstantData,
    DefineData,
    EnumAlias,
    EnumData,
    EnumValueData,
    ExtensionData,
    ExternalTypeData,
    IncludeData,
    MemberData,
    StructureData,
    TypeCategory,
    VideoRegistry,
)
from .util import is_hex_number, is_number, strip_postfix, strip_prefix, to_upper_case
from .validation import check_attributes, check_elements, check_for_error
from .xmltree import Element

logger = logging.getLogger(__name__)

PROTECT_PREFIX = "protect with "
DEPENDENCY_HEADER_PREFIX = "vk_video/vulkan_video_codec"
METADATA_CONSTANT_SUFFIXES = ("_SPEC_VERSION", "_EXTENSION_NAME")
CONSTANT_TYPES = frozenset(["uint32_t", "uint8_t"])


def _copyright_message(comment: str) -> str:
    message = comment.replace("\n", "\n// ").rstrip()
    message += "\n\n// This header is generated from the Khronos Vulkan XML API Registry."
    return message.strip() + "\n"


class RegistryReader:
    """Walks a registry document once, filling the registry and entity tables.

    A reader is good for exactly one document; construct a fresh one per run.
    """

    def __init__(self) -> None:
        self.types = TypeRegistry()
        self.tables = EntityTables(self.types)
        self.extensions: list[ExtensionData] = []
        self.copyright = ""

    def registry(self) -> VideoRegistry:
        """Return the model read so far."""
        return VideoRegistry(
            copyright=self.copyright,
            types=self.types.types,
            defines=self.tables.defines.items,
            enums=self.tables.enums.items,
            external_types=self.tables.external_types.items,
            includes=self.tables.includes.items,
            structs=self.tables.structs.items,
            extensions=self.extensions,
        )

    def is_extension(self, name: str | None) -> bool:
        return any(ext.name == name for ext in self.extensions)

    def read(self, root: Element) -> VideoRegistry:
        """Read a complete document, given its root element."""
        check_for_error(
            root.tag == "registry",
            root.line,
            f"encountered element <{root.tag}> but expected <registry>",
        )
        self.read_registry(root)
        return self.registry()

    def read_registry(self, element: Element) -> None:
        check_attributes(element.line, element.attributes, {})
        check_elements(
            element.line,
            element.children,
            {"comment": False, "enums": False, "extensions": True, "types": True},
        )

        for child in element.children:
            if child.tag == "comment":
                comment = self.read_comment(child)
                if comment.startswith("\nCopyright"):
                    self.copyright = _copyright_message(comment)
            elif child.tag == "enums":
                self.read_enums(child)
            elif child.tag == "extensions":
                self.read_extensions(child)
            elif child.tag == "types":
                self.read_types(child)

        check_for_error(bool(self.copyright), None, "missing copyright message")

    def read_comment(self, element: Element) -> str:
        check_attributes(element.line, element.attributes, {})
        check_elements(element.line, element.children, {})
        return element.text

    # ===--- types section ---=== #

    def read_types(self, element: Element) -> None:
        check_attributes(element.line, element.attributes, {"comment": ()})
        check_elements(element.line, element.children, {"type": False})

        for child in element.find_all("type"):
            self.read_types_type(child)

    def read_types_type(self, element: Element) -> None:
        attributes = element.attributes
        category = attributes.get("category")

        if category == "define":
            self.read_type_define(element)
        elif category == "enum":
            self.read_type_enum(element)
        elif category == "include":
            self.read_type_include(element)
        elif category == "struct":
            self.read_type_struct(element)
        elif category is not None:
            raise ValidationError(f"unknown category <{category}> encountered", element.line)
        elif "requires" in attributes:
            self.read_type_requires(element)
        else:
            check_for_error(
                attributes == {"name": "int"}, element.line, "unknown type"
            )
            self.types.declare("int", TypeCategory.UNKNOWN, element.line)

    def read_type_define(self, element: Element) -> None:
        line = element.line
        check_attributes(line, element.attributes, {"category": {"define"}}, {"requires": ()})
        check_elements(line, element.children, {"name": False}, {"type"})

        require = element.attributes.get("requires")
        name = ""
        type_name = ""
        for child in element.children:
            if child.tag == "name":
                name = child.text.strip()
            elif child.tag == "type":
                type_name = child.text.strip()

        check_for_error(
            not require or require in self.tables.defines,
            line,
            f"define <{name}> requires unknown type <{require}>",
        )
        check_for_error(
            not type_name or type_name in self.tables.defines,
            line,
            f"define <{name}> of unknown type <{type_name}>",
        )

        self.types.declare(name, TypeCategory.DEFINE, line)
        self.tables.defines.insert(name, DefineData(name=name, require=require, line=line), line)

    def read_type_enum(self, element: Element) -> None:
        line = element.line
        check_attributes(line, element.attributes, {"category": {"enum"}, "name": ()})
        check_elements(line, element.children, {})

        name = element.attributes["name"]
        self.types.declare(name, TypeCategory.ENUM, line)
        self.tables.enums.insert(name, EnumData(name=name, line=line), line)

    def read_type_include(self, element: Element) -> None:
        line = element.line
        check_attributes(line, element.attributes, {"category": {"include"}, "name": ()})
        check_elements(line, element.children, {})

        name = element.attributes["name"]
        self.types.declare(name, TypeCategory.INCLUDE, line)
        self.tables.includes.insert(name, IncludeData(name=name, line=line), line)

    def read_type_requires(self, element: Element) -> None:
        line = element.line
        check_attributes(line, element.attributes, {"name": (), "requires": ()})
        check_elements(line, element.children, {})

        name = element.attributes["name"]
        require = element.attributes["requires"]
        check_for_error(
            require in self.tables.includes,
            line,
            f"type <{name}> requires unknown <{require}>",
        )
        self.types.declare(name, TypeCategory.EXTERNAL_TYPE, line)
        self.tables.external_types.insert(
            name, ExternalTypeData(name=name, require=require, line=line), line
        )

    def read_type_struct(self, element: Element) -> None:
        line = element.line
        check_attributes(
            line,
            element.attributes,
            {"category": {"struct"}, "name": ()},
            {"comment": (), "requires": ()},
        )
        check_elements(line, element.children, {"member": False}, {"comment"})

        name = element.attributes["name"]
        require = element.attributes.get("requires")
        check_for_error(
            not require or require in self.types,
            line,
            f"struct <{name}> requires unknown type <{require}>",
        )
        self.types.declare(name, TypeCategory.STRUCT, line)
        structure = self.tables.structs.insert(name, StructureData(name=name, line=line), line)

        for child in element.find_all("member"):
            self.read_struct_member(child, structure)

    def read_struct_member(self, element: Element, structure: StructureData) -> None:
        line = element.line
        check_attributes(
            line, element.attributes, {}, {"len": (), "optional": {"false", "true"}}
        )
        check_elements(
            line, element.children, {"name": True, "type": True}, {"comment", "enum"}
        )

        name = ""
        type_info = None
        array_sizes: list[str] = []
        bit_count = None
        for child in element.children:
            check_attributes(child.line, child.attributes, {})
            check_elements(child.line, child.children, {})

            if child.tag == "enum":
                size = child.text.strip()
                check_for_error(
                    element.previous_text(child).rstrip().endswith("[")
                    and child.tail.lstrip().startswith("]"),
                    line,
                    f"struct member array specification is ill-formatted: <{size}>",
                )
                array_sizes.append(size)
            elif child.tag == "name":
                name = child.text.strip()
                modifiers = parse_modifiers(child.tail, line)
                array_sizes.extend(modifiers.array_sizes)
                bit_count = modifiers.bit_count
            elif child.tag == "type":
                type_info = read_type_info(element, child)

        check_for_error(type_info is not None, line, f"struct member <{name}> has no type")
        check_for_error(
            not (array_sizes and bit_count),
            line,
            f"struct member <{name}> is both an array and a bit-field",
        )
        check_for_error(
            all(member.name != name for member in structure.members),
            line,
            f"struct member name <{name}> already used",
        )
        structure.members.append(
            MemberData(
                name=name,
                type=type_info,
                line=line,
                array_sizes=array_sizes,
                bit_count=bit_count,
                len=element.attributes.get("len"),
                optional=element.attributes.get("optional"),
            )
        )

    # ===--- enums sections ---=== #

    def read_enums(self, element: Element) -> None:
        line = element.line
        check_attributes(line, element.attributes, {"name": ()}, {"type": {"enum"}})
        check_elements(line, element.children, {"enum": False}, {"comment"})

        name = element.attributes["name"]
        enum_type = element.attributes.get("type", "enum")
        check_for_error(
            enum_type == "enum", line, f"unknown type <{enum_type}> for enum <{name}>"
        )

        enum = self.tables.enums.get(name)
        if enum is None:
            raise ValidationError(
                f"enum <{name}> is not listed as enum in the types section", line
            )
        check_for_error(not enum.values, line, f"enum <{name}> already holds values")

        for child in element.find_all("enum"):
            self.read_enums_enum(child, enum)

    def read_enums_enum(self, element: Element, enum: EnumData) -> None:
        line = element.line
        attributes = element.attributes

        if "alias" in attributes:
            check_attributes(
                line, attributes, {"alias": (), "deprecated": {"aliased"}, "name": ()}
            )
            check_elements(line, element.children, {})

            alias = attributes["alias"]
            name = attributes["name"]
            value = next((v for v in enum.values if v.name == alias), None)
            if value is None:
                raise ValidationError(
                    f"enum value <{name}> uses unknown alias <{alias}>", line
                )
            check_for_error(
                all(a.name != name for a in value.aliases),
                line,
                f"enum alias <{name}> already listed for enum value <{alias}>",
            )
            taken = {v.name for v in enum.values} | {
                a.name for v in enum.values for a in v.aliases
            }
            check_for_error(
                name not in taken, line, f"enum alias <{name}> already used in enum <{enum.name}>"
            )
            value.aliases.append(EnumAlias(name=name, line=line))
        else:
            check_attributes(line, attributes, {"name": (), "value": ()}, {"comment": ()})
            check_elements(line, element.children, {})

            name = attributes["name"]
            value_text = attributes["value"]
            prefix = to_upper_case(enum.name) + "_"
            check_for_error(
                name.startswith(prefix),
                line,
                f"encountered enum value <{name}> that does not begin with expected prefix "
                f"<{prefix}>",
            )
            check_for_error(
                is_number(value_text) or is_hex_number(value_text),
                line,
                f"enum value uses unknown constant <{value_text}>",
            )
            check_for_error(
                all(v.name != name for v in enum.values),
                line,
                f"enum value <{name}> already part of enum <{enum.name}>",
            )
            enum.values.append(EnumValueData(name=name, value=value_text, line=line))

    # ===--- extensions section ---=== #

    def read_extensions(self, element: Element) -> None:
        check_attributes(element.line, element.attributes, {})
        check_elements(element.line, element.children, {"extension": False})

        for child in element.find_all("extension"):
            self.read_extension(child)

    def read_extension(self, element: Element) -> None:
        line = element.line
        attributes = element.attributes
        check_attributes(
            line,
            attributes,
            {"name": (), "comment": (), "number": (), "supported": {"vulkan"}},
        )
        check_elements(line, element.children, {"require": False})

        comment = attributes["comment"]
        check_for_error(
            comment.startswith(PROTECT_PREFIX + "VULKAN_VIDEO_CODEC"),
            line,
            f'unexpected content of attribute <comment>: "{comment}"',
        )

        name = attributes["name"]
        check_for_error(
            not self.is_extension(name), line, f"already encountered extension <{name}>"
        )

        number = attributes["number"]
        check_for_error(is_number(number), line, f"extension number <{number}> is not a number")
        check_for_error(
            all(ext.number != int(number) for ext in self.extensions),
            line,
            f"extension number <{number}> already encountered",
        )

        extension = ExtensionData(
            name=name,
            number=int(number),
            protect=strip_prefix(comment, PROTECT_PREFIX),
            line=line,
        )
        for child in element.find_all("require"):
            self.read_extension_require(child, extension)

        logger.debug(
            "read extension %s with %d types", extension.name, len(extension.require.types)
        )
        self.extensions.append(extension)

    def read_extension_require(self, element: Element, extension: ExtensionData) -> None:
        line = element.line
        check_attributes(line, element.attributes, {})
        check_elements(line, element.children, {}, {"enum", "type"})

        extension.require.line = line
        for child in element.children:
            if child.tag == "enum":
                self.read_require_enum(child, extension)
            elif child.tag == "type":
                self.read_require_type(child, extension)

        check_for_error(
            bool(extension.require.types),
            line,
            f"extension <{extension.name}> does not require any type",
        )

    def read_require_enum(self, element: Element, extension: ExtensionData) -> None:
        line = element.line
        attributes = element.attributes
        check_elements(line, element.children, {})
        check_attributes(line, attributes, {"name": (), "value": ()}, {"type": CONSTANT_TYPES})

        name = attributes["name"]
        value = attributes["value"]
        if name.endswith(METADATA_CONSTANT_SUFFIXES):
            return

        constant_type = attributes.get("type", "")
        check_for_error(bool(constant_type), line, f"constant <{name}> has no type specified")
        check_for_error(
            is_number(value) or is_hex_number(value),
            line,
            f"enum value uses unknown constant <{value}>",
        )
        check_for_error(
            name not in extension.require.constants,
            line,
            f"required enum <{name}> already specified",
        )
        extension.require.constants[name] = ConstantData(
            name=name, type=constant_type, value=value, line=line
        )

    def read_require_type(self, element: Element, extension: ExtensionData) -> None:
        line = element.line
        check_attributes(line, element.attributes, {"name": ()}, {"comment": ()})
        check_elements(line, element.children, {})

        name = element.attributes["name"]
        if name.startswith(DEPENDENCY_HEADER_PREFIX) and name.endswith(".h"):
            check_for_error(
                extension.depends is None,
                line,
                f"extension <{extension.name}> already depends on <{extension.depends}>",
            )
            extension.depends = strip_prefix(strip_postfix(name, ".h"), "vk_video/")
            check_for_error(
                self.is_extension(extension.depends),
                line,
                f"extension <{extension.name}> uses unknown header <{name}>",
            )
        else:
            descriptor = self.types.lookup(name)
            if descriptor is None:
                raise ValidationError(f"unknown required type <{name}>", line)
            check_for_error(
                name not in extension.require.types,
                line,
                f"type <{name}> already required by extension <{extension.name}>",
            )
            descriptor.required_by.add(extension.name)
            extension.require.types.append(name)
