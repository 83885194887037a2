"""Whole-model checks run after dependency resolution."""

from .errors import OwnershipError, ValidationError
from .types import ExtensionData, MemberData, VideoRegistry
from .util import is_number
from .validation import check_for_error, check_for_warning

API_TYPE_PREFIX = "StdVideo"


def _check_array_size(
    registry: VideoRegistry, extension: ExtensionData, member: MemberData, size: str
) -> None:
    if size in extension.require.constants:
        return
    depends = registry.find_extension(extension.depends)
    check_for_error(
        depends is not None and size in depends.require.constants,
        member.line,
        f"struct member <{member.name}> uses unknown constant <{size}> as array size",
    )


def check_correctness(registry: VideoRegistry) -> None:
    """Check the invariants that can only be verified on the complete model."""
    for name, structure in registry.structs.items():
        owners = registry.types[name].required_by
        check_for_error(
            bool(owners), structure.line, f"structure <{name}> not required by any extension"
        )
        if len(owners) > 1:
            raise OwnershipError(
                f"structure <{name}> required by more than one extension "
                f"<{', '.join(sorted(owners))}>",
                structure.line,
            )

        owner = next(iter(owners))
        extension = registry.find_extension(owner)
        if extension is None:
            raise ValidationError(
                f"structure <{name}> required by unknown extension <{owner}>", structure.line
            )

        for member in structure.members:
            member_type = registry.types.get(member.type.type)
            if member_type is None:
                raise ValidationError(
                    f"struct member uses unknown type <{member.type.type}>", member.line
                )

            if member.type.type.startswith(API_TYPE_PREFIX):
                check_for_warning(
                    bool(member_type.required_by),
                    member.line,
                    f"struct member type <{member.type.type}> used in struct <{name}> is never "
                    f"required for any extension",
                )

            for size in member.array_sizes:
                if not is_number(size):
                    _check_array_size(registry, extension, member, size)
