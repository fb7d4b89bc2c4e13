"""Reading and writing small XML documents through a DOM tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Union
from xml.dom import Node, minidom
from xml.parsers.expat import ExpatError

_SAVE_INDENT = 4
_STRING_INDENT = 1


@dataclass
class XmlAttr:
    """An attribute name with its value."""

    key: str = ""
    value: Any = None


@dataclass
class XmlNode:
    """The attributes and text of one element."""

    attrs: list[XmlAttr] = field(default_factory=list)
    text: str = ""


AttrSpec = Union[XmlAttr, Iterable[XmlAttr], None]


def _first_child_element(node: Node) -> minidom.Element | None:
    return next((c for c in node.childNodes if c.nodeType == Node.ELEMENT_NODE), None)


def _next_sibling_element(node: Node) -> minidom.Element | None:
    sibling = node.nextSibling
    while sibling is not None and sibling.nodeType != Node.ELEMENT_NODE:
        sibling = sibling.nextSibling
    return sibling


def _element_text(node: Node) -> str:
    parts = []
    for child in node.childNodes:
        if child.nodeType in (Node.TEXT_NODE, Node.CDATA_SECTION_NODE):
            parts.append(child.data)
        elif child.nodeType == Node.ELEMENT_NODE:
            parts.append(_element_text(child))
    return "".join(parts)


def _strip_blank_text(node: Node) -> None:
    for child in list(node.childNodes):
        if child.nodeType == Node.TEXT_NODE and not child.data.strip():
            node.removeChild(child)
        elif child.hasChildNodes():
            _strip_blank_text(child)


def _element_node(element: minidom.Element) -> XmlNode:
    attrs = [XmlAttr(name, value) for name, value in element.attributes.items()]
    return XmlNode(attrs, _element_text(element))


def _format_value(value: Any) -> str | None:
    """Text for an attribute value, or None for unsupported types."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    return None


class XmlHelper:
    """Walks the elements below a root node in document order."""

    def __init__(self, root: Node | None) -> None:
        self._root = root
        self._current = root
        self._node_names: set[str] = set()

    def load(self) -> None:
        """Walk the whole tree, remembering the name of every element."""
        while True:
            if self._current is not None and self._current.nodeType == Node.ELEMENT_NODE:
                self._node_names.add(self._current.nodeName)
            if not self.has_next():
                break

    def has_next(self) -> bool:
        """Advance to the next element; tell whether there was one."""
        if self._root is None or self._current is None:
            return False

        child = _first_child_element(self._current)
        if child is not None:
            self._current = child
            return True

        sibling = _next_sibling_element(self._current)
        if sibling is not None:
            self._current = sibling
            return True

        while self._current is not self._root and _next_sibling_element(self._current) is None:
            self._current = self._current.parentNode
            if self._current is None:
                return False

        if self._current is self._root:
            return False
        self._current = _next_sibling_element(self._current)
        return True

    def next(self) -> Node | None:
        """The node the walk stands on."""
        return self._current

    def node_name(self, name: str) -> str:
        """The known element name matching *name* case-insensitively, else *name*."""
        wanted = name.lower()
        return next((value for value in self._node_names if value.lower() == wanted), name)


class XmlDocument:
    """An XML document bound optionally to a file on disk."""

    def __init__(self) -> None:
        self._path: Path | None = None
        self._document: minidom.Document | None = None

    @property
    def document(self) -> minidom.Document:
        if self._document is None:
            raise ValueError("no XML document loaded")
        return self._document

    @property
    def path(self) -> Path | None:
        return self._path

    def load(self, name: str | Path) -> None:
        """Start an empty document that :meth:`save` writes to *name*.

        The file is created or truncated at once; OSError is raised if it
        cannot be opened for writing.
        """
        path = Path(name)
        self._path = None
        self._document = minidom.Document()
        with path.open("w", encoding="utf-8"):
            pass
        self._path = path

    def save(self) -> None:
        """Write the document to the file given to :meth:`load`."""
        if self._path is None or self._document is None:
            return
        self._path.write_text(self._serialize(_SAVE_INDENT), encoding="utf-8")

    def reset(self) -> None:
        """Discard the document and truncate its file."""
        if self._path is None or self._document is None:
            raise ValueError("no XML file to reset")
        self.load(self._path)

    def from_file(self, name: str | Path) -> None:
        """Parse the document from file *name*."""
        path = Path(name)
        self._path = None
        self._document = minidom.Document()
        data = path.read_bytes()
        self._parse(data)
        self._path = path

    def from_string(self, data: str) -> None:
        """Parse the document from text."""
        self._path = None
        self._document = minidom.Document()
        self._parse(data)

    def from_bytes(self, data: bytes) -> None:
        """Parse the document from encoded bytes."""
        self._path = None
        self._document = minidom.Document()
        self._parse(bytes(data))

    def _parse(self, data: str | bytes) -> None:
        try:
            document = minidom.parseString(data)
        except ExpatError as error:
            raise ValueError(f"malformed XML: {error}") from error
        _strip_blank_text(document)
        self._document = document

    def _serialize(self, indent: int) -> str:
        if self._document is None:
            return ""
        return "".join(
            child.toprettyxml(indent=" " * indent) for child in self._document.childNodes
        )

    def to_string(self) -> str:
        """The document as indented text, empty when there is none."""
        return self._serialize(_STRING_INDENT)

    def to_bytes(self) -> bytes:
        """The document as UTF-8 bytes."""
        return self.to_string().encode("utf-8")

    def create_processing_instruction(self) -> None:
        """Append the XML declaration to the document."""
        document = self.document
        node = document.createProcessingInstruction("xml", "version='1.0' encoding='UTF-8'")
        document.appendChild(node)

    def _elements(self, tag_name: str) -> list[minidom.Element]:
        return list(self.document.getElementsByTagName(tag_name))

    def read_attribute_by_tag_name(self, tag_name: str, attr_name: str = "value") -> str:
        """Attribute of the first element named *tag_name*, or ''."""
        elements = self._elements(tag_name)
        return elements[0].getAttribute(attr_name) if elements else ""

    def read_text_by_tag_name(self, tag_name: str) -> str:
        """Text of the first element named *tag_name*, or ''."""
        elements = self._elements(tag_name)
        return _element_text(elements[0]) if elements else ""

    def read_node_by_tag_name(self, tag_name: str) -> XmlNode:
        """Attributes and text of the first element named *tag_name*."""
        elements = self._elements(tag_name)
        return _element_node(elements[0]) if elements else XmlNode()

    def read_multi_attribute_by_tag_name(self, tag_name: str, attr_name: str = "value") -> list[str]:
        """Attribute of every element named *tag_name*."""
        return [element.getAttribute(attr_name) for element in self._elements(tag_name)]

    def read_multi_text_by_tag_name(self, tag_name: str) -> list[str]:
        """Text of every element named *tag_name*."""
        return [_element_text(element) for element in self._elements(tag_name)]

    def read_multi_node_by_tag_name(self, tag_name: str) -> list[XmlNode]:
        """Attributes and text of every element named *tag_name*."""
        return [_element_node(element) for element in self._elements(tag_name)]

    def create_root(self, node: str, attrs: AttrSpec = None) -> minidom.Element:
        """Create the document element, with optional attributes."""
        document = self.document
        element = document.createElement(node)
        if attrs is not None:
            self.write_attribute(element, attrs)
        document.appendChild(element)
        return element

    def write_dom_element(
        self,
        element: minidom.Element,
        node: str,
        text: str | None = None,
        attrs: AttrSpec | XmlNode = None,
    ) -> minidom.Element | None:
        """Append a child element with optional attributes and text.

        Given an :class:`XmlNode` as *attrs*, behaves as
        :meth:`write_dom_multi_element`.
        """
        if isinstance(attrs, XmlNode):
            return self.write_dom_multi_element(element, node, attrs)
        child = self.document.createElement(node)
        element.appendChild(child)
        if attrs is not None:
            self.write_attribute(child, attrs)
        if text is not None:
            child.appendChild(self.document.createTextNode(text))
        return child

    def write_dom_multi_element(
        self,
        element: minidom.Element,
        node: str,
        attrs: XmlNode | Iterable[XmlAttr],
        text: str | None = None,
    ) -> minidom.Element | None:
        """Append a child element carrying several attributes.

        Nothing is written, and None returned, when there are no attributes.
        """
        if isinstance(attrs, XmlNode):
            attrs, text = attrs.attrs, attrs.text
        attrs = list(attrs)
        if not attrs:
            return None
        return self.write_dom_element(element, node, text, attrs)

    def write_attribute(self, element: minidom.Element, attr: XmlAttr | Iterable[XmlAttr]) -> None:
        """Set attributes on *element*; values of unsupported types are skipped."""
        attrs = [attr] if isinstance(attr, XmlAttr) else attr
        for item in attrs:
            text = _format_value(item.value)
            if text is not None:
                element.setAttribute(item.key, text)