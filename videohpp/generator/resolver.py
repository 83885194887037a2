"""Dependency resolution over the extensions' required-type lists.

Two passes run per extension. The first injects structs that are only
reachable through members of explicitly required structs; the second
reorders the list so that no struct precedes a struct it contains.
"""

import logging

from .errors import DependencyError, OwnershipError
from .types import ExtensionData, TypeCategory, VideoRegistry

logger = logging.getLogger(__name__)


def _cycle_error(registry: VideoRegistry, path: tuple[str, ...], name: str) -> DependencyError:
    chain = " -> ".join((*path[path.index(name) :], name))
    return DependencyError(
        f"circular struct dependency <{chain}>", registry.structs[name].line
    )


def _inject(
    registry: VideoRegistry,
    name: str,
    extension: ExtensionData,
    index: int,
    path: tuple[str, ...],
) -> int:
    """Inject ``name`` and its member structs in front of ``index``.

    Returns the index of the entry that was at ``index`` before the call.
    """
    if name in path:
        raise _cycle_error(registry, path, name)

    types = extension.require.types
    for member in registry.structs[name].members:
        if registry.category_of(member.type.type) == TypeCategory.STRUCT:
            index = _inject(registry, member.type.type, extension, index, (*path, name))

    descriptor = registry.types[name]
    if not descriptor.required_by <= {extension.name, extension.depends}:
        owners = ", ".join(sorted(descriptor.required_by))
        raise OwnershipError(
            f"struct <{name}> used by extension <{extension.name}> is already required by "
            f"<{owners}>",
            registry.structs[name].line,
        )

    if not descriptor.required_by and name not in types[:index]:
        logger.debug("extension %s implicitly requires %s", extension.name, name)
        descriptor.required_by.add(extension.name)
        types.insert(index, name)
        index += 1
    return index


def add_implicitly_required_types(registry: VideoRegistry) -> None:
    """Add every struct reachable through struct members to the requiring extension."""
    for extension in registry.extensions:
        types = extension.require.types
        index = 0
        while index < len(types):
            if registry.category_of(types[index]) == TypeCategory.STRUCT:
                index = _inject(registry, types[index], extension, index, ())
            index += 1


def _sorted_types(registry: VideoRegistry, extension: ExtensionData) -> list[str]:
    snapshot = list(extension.require.types)
    listed = set(snapshot)
    depends = registry.find_extension(extension.depends)
    ordered: list[str] = []
    placed: set[str] = set()

    def place(name: str, path: tuple[str, ...]) -> None:
        if name in placed:
            return
        if name in path:
            raise _cycle_error(registry, path, name)

        if registry.category_of(name) == TypeCategory.STRUCT:
            for member in registry.structs[name].members:
                member_type = member.type.type
                if registry.category_of(member_type) != TypeCategory.STRUCT:
                    continue
                if member_type in listed:
                    if member_type not in placed:
                        logger.debug(
                            "extension %s: moving %s in front of %s",
                            extension.name,
                            member_type,
                            name,
                        )
                    place(member_type, (*path, name))
                elif depends is None or member_type not in depends.require.types:
                    raise DependencyError(
                        f"struct <{name}> required by extension <{extension.name}> uses struct "
                        f"<{member_type}>, which is neither required by <{extension.name}> nor "
                        f"by the extension it depends on",
                        member.line,
                    )

        placed.add(name)
        ordered.append(name)

    for name in snapshot:
        place(name, ())
    return ordered


def sort_structs(registry: VideoRegistry) -> None:
    """Reorder each extension's types so that structs follow their member structs."""
    for extension in registry.extensions:
        extension.require.types = _sorted_types(registry, extension)


def resolve(registry: VideoRegistry) -> None:
    """Run both resolution passes over a freshly read registry."""
    add_implicitly_required_types(registry)
    sort_structs(registry)
