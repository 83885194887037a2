"""Attribute and child-element checks shared by the registry reader."""

import logging
from collections import Counter
from collections.abc import Collection, Mapping

from .errors import ValidationError
from .xmltree import Element

logger = logging.getLogger(__name__)


def check_for_error(condition: bool, line: int | None, message: str) -> None:
    """Raise a ValidationError unless ``condition`` holds."""
    if not condition:
        raise ValidationError(message, line)


def check_for_warning(condition: bool, line: int | None, message: str) -> None:
    """Log a warning unless ``condition`` holds."""
    if not condition:
        logger.warning("line %s: %s", line, message)


def check_attributes(
    line: int,
    attributes: Mapping[str, str],
    required: Mapping[str, Collection[str]],
    optional: Mapping[str, Collection[str]] | None = None,
) -> None:
    """Check an element's attributes against the required and optional sets.

    Both mappings go from attribute name to the collection of allowed values;
    an empty collection allows any value. Attribute values may be comma
    separated lists, in which case every entry is checked.
    """
    optional = optional or {}

    for name, allowed in required.items():
        check_for_error(name in attributes, line, f"missing attribute <{name}>")
        if allowed:
            for value in attributes[name].split(","):
                check_for_error(
                    value in allowed,
                    line,
                    f"unexpected attribute value <{value}> in attribute <{name}>",
                )

    for name, value in attributes.items():
        if name in required:
            continue
        if name not in optional:
            check_for_warning(False, line, f"unknown attribute <{name}>")
            continue
        allowed = optional[name]
        if allowed:
            for token in value.split(","):
                check_for_warning(
                    token in allowed,
                    line,
                    f"unexpected attribute value <{token}> in attribute <{name}>",
                )


def check_elements(
    line: int,
    elements: list[Element],
    required: Mapping[str, bool],
    optional: Collection[str] = (),
) -> None:
    """Check an element's children against the required and optional tags.

    ``required`` maps a tag to whether it has to be listed exactly once.
    """
    encountered = Counter(element.tag for element in elements)
    for element in elements:
        check_for_warning(
            element.tag in required or element.tag in optional,
            element.line,
            f"unknown element <{element.tag}>",
        )

    for tag, exactly_once in required.items():
        count = encountered[tag]
        check_for_error(count > 0, line, f"missing required element <{tag}>")
        check_for_error(
            not exactly_once or count == 1,
            line,
            f"required element <{tag}> is supposed to be listed exactly once, "
            f"but is listed {count}",
        )
