"""Line-numbered markup tree for the video registry.

The reader needs the source line of every element for diagnostics, and the
character data around child elements to pick up type prefixes, pointer
postfixes and array brackets. ``xml.etree`` keeps the latter but drops the
former, so the tree is built straight from the expat callbacks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from xml.parsers import expat

from .errors import ValidationError


@dataclass
class Element:
    """A markup element, laid out like ``xml.etree.ElementTree.Element``."""

    tag: str
    attributes: dict[str, str]
    line: int
    children: list[Element] = field(default_factory=list)
    text: str = ""
    tail: str = ""

    def previous_text(self, child: Element) -> str:
        """Return the character data directly in front of ``child``."""
        index = self.children.index(child)
        if index == 0:
            return self.text
        return self.children[index - 1].tail

    def find_all(self, tag: str) -> list[Element]:
        return [child for child in self.children if child.tag == tag]


class _TreeBuilder:
    def __init__(self) -> None:
        self.parser = expat.ParserCreate()
        self.parser.buffer_text = True
        self.parser.StartElementHandler = self._start
        self.parser.EndElementHandler = self._end
        self.parser.CharacterDataHandler = self._data
        self.root: Element | None = None
        self._stack: list[Element] = []

    def _start(self, tag: str, attributes: dict[str, str]) -> None:
        element = Element(tag=tag, attributes=dict(attributes), line=self.parser.CurrentLineNumber)
        if self._stack:
            self._stack[-1].children.append(element)
        else:
            self.root = element
        self._stack.append(element)

    def _end(self, _tag: str) -> None:
        self._stack.pop()

    def _data(self, data: str) -> None:
        if not self._stack:
            return
        parent = self._stack[-1]
        if parent.children:
            parent.children[-1].tail += data
        else:
            parent.text += data

    def feed(self, text: str) -> Element:
        try:
            self.parser.Parse(text, True)
        except expat.ExpatError as e:
            raise ValidationError(
                f"malformed markup: {expat.ErrorString(e.code)}", e.lineno
            ) from e
        assert self.root is not None
        return self.root


def parse_document(text: str) -> Element:
    """Parse a complete markup document and return its root element."""
    return _TreeBuilder().feed(text)
