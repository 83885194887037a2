"""C++ header and module interface generator for video registries."""

from jinja2 import Environment, PackageLoader, Template

from .types import (
    EnumData,
    ExtensionData,
    MemberData,
    StructureData,
    TypeCategory,
    TypeInfo,
    VideoRegistry,
)
from .util import strip_prefix, to_camel_case, to_upper_case

env = Environment(
    loader=PackageLoader("videohpp.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

hpp_template = env.get_template("vulkan_video.hpp.j2")
cppm_template = env.get_template("vulkan_video.cppm.j2")

API_TYPE_PREFIX = "StdVideo"
API_CONSTANT_PREFIX = "STD_VIDEO_"
VIDEO_NAMESPACE = "VULKAN_HPP_NAMESPACE::VULKAN_HPP_VIDEO_NAMESPACE"

# Types compared with operator== even though they are external
SIMPLE_TYPES = frozenset(
    [
        "char",
        "double",
        "DWORD",
        "float",
        "HANDLE",
        "HINSTANCE",
        "HMONITOR",
        "HWND",
        "int",
        "int8_t",
        "int16_t",
        "int32_t",
        "int64_t",
        "LPCWSTR",
        "size_t",
        "uint8_t",
        "uint16_t",
        "uint32_t",
        "uint64_t",
    ]
)


def _strip_api_prefix(name: str) -> str:
    return strip_prefix(name, API_TYPE_PREFIX)


def _constant_name(name: str) -> str:
    """Map ``STD_VIDEO_H264_CPB_CNT_LIST_SIZE`` to ``H264CpbCntListSize``."""
    return to_camel_case(strip_prefix(name, API_CONSTANT_PREFIX), True)


def _enum_value_name(enum_name: str, value_name: str) -> str:
    prefix = to_upper_case(enum_name) + "_"
    return "e" + to_camel_case(strip_prefix(value_name, prefix), True)


def _compose(type_info: TypeInfo, prefix_to_strip: str, namespace: str = "") -> str:
    """Compose a C++ type, moving API types into ``namespace``."""
    if namespace:
        scope = f"{namespace}::" if type_info.type.startswith(prefix_to_strip) else ""
        type_name = scope + strip_prefix(type_info.type, prefix_to_strip)
    else:
        type_name = type_info.type
    parts = [part for part in (type_info.prefix, type_name, type_info.postfix) if part]
    return " ".join(parts)


def _array_wrapper(type_name: str, sizes: list[str]) -> str:
    return f"VULKAN_HPP_NAMESPACE::ArrayWrapper{len(sizes)}D<{type_name}, {', '.join(sizes)}>"


def render(registry: VideoRegistry, template: Template) -> str:
    """Render a resolved registry with one of the bundled templates."""

    def enum_entries(enum: EnumData) -> list[str]:
        entries: list[str] = []
        for value in enum.values:
            value_name = _enum_value_name(enum.name, value.name)
            entries.append(f"{value_name} = {value.name}")
            for alias in value.aliases:
                alias_name = _enum_value_name(enum.name, alias.name)
                entries.append(
                    f'{alias_name} VULKAN_HPP_DEPRECATED_17( "{alias_name} is deprecated, '
                    f'{value_name} should be used instead." ) = {alias.name}'
                )
        return entries

    def compare_members(structure: StructureData) -> str:
        comparisons: list[str] = []
        for member in structure.members:
            category = registry.category_of(member.type.type)
            if (
                category == TypeCategory.EXTERNAL_TYPE
                and not member.type.postfix
                and member.type.type not in SIMPLE_TYPES
            ):
                comparisons.append(
                    f"( memcmp( &{member.name}, &rhs.{member.name}, "
                    f"sizeof( {member.type.type} ) ) == 0 )"
                )
            else:
                comparisons.append(f"( {member.name} == rhs.{member.name} )")
        return "\n          && ".join(comparisons) or "true"

    def member_declaration(member: MemberData) -> str:
        if member.bit_count and member.type.type.startswith(API_TYPE_PREFIX):
            member_type = member.type.type
        elif not member.array_sizes:
            member_type = _compose(member.type, API_TYPE_PREFIX, VIDEO_NAMESPACE)
        else:
            member_type = _array_wrapper(_compose(member.type, ""), member.array_sizes)

        if member.bit_count:
            return f"{member_type} {member.name} : {member.bit_count}"

        enum = registry.enums.get(member.type.type)
        if not member.array_sizes and enum and enum.values and not member.type.postfix:
            first = _enum_value_name(enum.name, enum.values[0].name)
            return f"{member_type} {member.name} = {member_type}::{first}"
        return f"{member_type} {member.name} = {{}}"

    def extension_types(extension: ExtensionData, table: dict) -> list:
        return [table[name] for name in extension.require.types if name in table]

    return template.render(
        registry=registry,
        extensions=registry.extensions,
        extension_types=extension_types,
        strip_api_prefix=_strip_api_prefix,
        constant_name=_constant_name,
        enum_entries=enum_entries,
        compare_members=compare_members,
        member_declaration=member_declaration,
        namespace=VIDEO_NAMESPACE,
    )


def render_hpp(registry: VideoRegistry) -> str:
    """Render the ``vulkan_video.hpp`` header."""
    return render(registry, hpp_template)


def render_cppm(registry: VideoRegistry) -> str:
    """Render the ``vulkan_video.cppm`` module interface."""
    return render(registry, cppm_template)
