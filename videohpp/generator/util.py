"""Naming helpers for registry identifiers."""

import re

_HEX_RE = re.compile(r"^0x[0-9a-fA-F]+$")


def is_number(text: str) -> bool:
    """Check if ``text`` is a plain decimal literal."""
    return text.isascii() and text.isdigit()


def is_hex_number(text: str) -> bool:
    """Check if ``text`` is a ``0x`` prefixed hexadecimal literal."""
    return _HEX_RE.match(text) is not None


def strip_prefix(value: str, prefix: str) -> str:
    return value[len(prefix) :] if prefix and value.startswith(prefix) else value


def strip_postfix(value: str, postfix: str) -> str:
    return value[: -len(postfix)] if postfix and value.endswith(postfix) else value


def to_upper_case(name: str) -> str:
    """Convert a CamelCase type name to its UPPER_SNAKE enumerator prefix.

    Digits stay attached to the capitals in front of them, so
    ``StdVideoH264ChromaFormatIdc`` becomes ``STD_VIDEO_H264_CHROMA_FORMAT_IDC``.
    """
    converted: list[str] = []
    previous_is_lower = False
    previous_is_digit = False
    for c in name:
        if (c.isupper() and (previous_is_lower or previous_is_digit)) or (
            c.isdigit() and previous_is_lower
        ):
            converted.append("_")
        converted.append(c.upper())
        previous_is_lower = c.islower()
        previous_is_digit = c.isdigit()
    return "".join(converted)


def to_camel_case(value: str, keep_separated_numbers_separated: bool = False) -> str:
    """Convert an UPPER_SNAKE identifier to CamelCase.

    With ``keep_separated_numbers_separated``, an underscore between two digits
    survives, so ``LEVEL_1_0`` becomes ``Level1_0`` rather than ``Level10``.
    """
    result: list[str] = []
    keep_upper = True
    for i, c in enumerate(value):
        if c == "_":
            if (
                keep_separated_numbers_separated
                and 0 < i < len(value) - 1
                and value[i - 1].isdigit()
                and value[i + 1].isdigit()
            ):
                result.append("_")
            keep_upper = True
        elif c.isdigit():
            result.append(c)
            keep_upper = True
        elif keep_upper:
            result.append(c)
            keep_upper = False
        else:
            result.append(c.lower())
    return "".join(result)
