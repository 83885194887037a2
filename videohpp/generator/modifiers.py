"""Struct member declarator parsing using Lark."""

import os
from dataclasses import dataclass, field
from typing import Any

from lark import Lark
from lark.exceptions import LarkError
from lark.visitors import Transformer

from .errors import ValidationError
from .types import TypeInfo
from .xmltree import Element

_g_parser: Lark | None = None


@dataclass
class Modifiers:
    """Array sizes and bit-field width trailing a member name."""

    array_sizes: list[str] = field(default_factory=list)
    bit_count: str | None = None


class ModifierTransformer(Transformer):
    """Transform a declarator parse tree into Modifiers."""

    def array(self, args: list[Any]) -> str:
        return str(args[0])

    def arrays(self, args: list[Any]) -> Modifiers:
        return Modifiers(array_sizes=list(args))

    def bitfield(self, args: list[Any]) -> Modifiers:
        return Modifiers(bit_count=str(args[0]))

    def open_array(self, _args: list[Any]) -> Modifiers:
        return Modifiers()


def _parser() -> Lark:
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/modifiers.lark", encoding="utf-8") as f:
            grammar = f.read()
        _g_parser = Lark(grammar)
    return _g_parser


def parse_modifiers(text: str, line: int) -> Modifiers:
    """Parse the text following a member's ``<name>`` element."""
    if not text.strip():
        return Modifiers()
    try:
        tree = _parser().parse(text)
    except LarkError as e:
        raise ValidationError(f"unknown modifier <{text.strip()}>", line) from e
    return ModifierTransformer().transform(tree)


def read_type_info(parent: Element, element: Element) -> TypeInfo:
    """Read a ``<type>`` child together with the qualifiers around it."""
    return TypeInfo(
        prefix=parent.previous_text(element).strip(),
        type=element.text.strip(),
        postfix=element.tail.strip(),
    )
