"""Video registry parser: read, resolve and check a registry document."""

import logging

from .checker import check_correctness
from .errors import (
    DependencyError,
    DuplicateDefinitionError,
    DuplicateTypeError,
    OwnershipError,
    ValidationError,
)
from .reader import RegistryReader
from .resolver import resolve
from .types import VideoRegistry
from .xmltree import Element, parse_document

__all__ = [
    "DependencyError",
    "DuplicateDefinitionError",
    "DuplicateTypeError",
    "OwnershipError",
    "ValidationError",
    "load",
    "parse",
]

logger = logging.getLogger(__name__)


def load(root: Element) -> VideoRegistry:
    """Build the resolved and checked model from an already parsed document."""
    registry = RegistryReader().read(root)
    resolve(registry)
    check_correctness(registry)
    logger.debug(
        "registry with %d types, %d structs and %d extensions",
        len(registry.types),
        len(registry.structs),
        len(registry.extensions),
    )
    return registry


def parse(text: str) -> VideoRegistry:
    """Parse a video registry document."""
    return load(parse_document(text))
