"""Element tree data model.

Two variants share one implementation:

* :class:`ElementRef` is what the parser produces. Its name and attributes are
  :class:`~loose_xml.tokenization.SourceView` objects into the parsed text, and
  so is its text content until a second text run forces a concatenated copy.
  It keeps the source string alive for as long as the tree exists.
* :class:`Element` owns plain strings only, and is what callers build by hand.
  ``into_owned()`` converts one into the other.

Both compare by string value, so an ``ElementRef`` equals its owned copy.
"""

from typing import Any, Dict, Iterator, List, Optional, Union

from loose_xml.shared.config import MapStrategy
from loose_xml.tokenization import SourceView

from .attributes import AttributeMap, new_attribute_map, strategy_of
from .formatting import format_element

TextValue = Union[str, SourceView]

# Max length of the text shown by repr()
REPR_TEXT_LENGTH = 20


class ElementBase:
    """Behaviour shared by the borrowing and owned element variants."""

    __slots__ = ("name", "attributes", "children", "text_content")

    def __init__(
        self, name: TextValue, map_strategy: MapStrategy = MapStrategy.ORDERED
    ) -> None:
        self.name: TextValue = name
        self.attributes: AttributeMap = new_attribute_map(map_strategy)
        self.children: List[Any] = []
        self.text_content: TextValue = ""

    @property
    def tag(self) -> str:
        """Element name as a plain string."""
        return str(self.name)

    @property
    def text(self) -> str:
        """Text content as a plain string."""
        return str(self.text_content)

    @property
    def map_strategy(self) -> MapStrategy:
        """Strategy of this element's attribute map."""
        return strategy_of(self.attributes)

    # Attributes

    def attr(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get an attribute value, or ``default`` when it is missing."""
        value = self.attributes.get(key)
        if value is None:
            return default
        return str(value)

    def require_attr(self, key: str) -> str:
        """Get an attribute value, raising ``KeyError`` when it is missing."""
        value = self.attributes.get(key)
        if value is None:
            raise KeyError(f"attribute '{key}' not found on <{self.name}>")
        return str(value)

    def set_attr(self, key: TextValue, value: TextValue) -> "ElementBase":
        """Set an attribute, replacing any previous value for ``key``."""
        self.attributes[key] = value
        return self

    def remove_attr(self, key: str) -> Optional[str]:
        """Remove an attribute and return its value, if it was present."""
        value = self.attributes.pop(key, None)
        if value is None:
            return None
        return str(value)

    # Children

    def child(self, name: str) -> Optional[Any]:
        """Find the first child element with the given name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def require_child(self, name: str) -> Any:
        """Find the first child with the given name, raising ``KeyError``."""
        found = self.child(name)
        if found is None:
            raise KeyError(f"child element '{name}' not found in <{self.name}>")
        return found

    def children_named(self, name: str) -> Iterator[Any]:
        """Iterate over all child elements with the given name."""
        return (child for child in self.children if child.name == name)

    def append_child(self, child: "ElementBase") -> "ElementBase":
        """Append a child element."""
        if not isinstance(child, ElementBase):
            raise TypeError("Child must be an element instance")
        self.children.append(child)
        return self

    # Text

    def set_text(self, text: TextValue) -> "ElementBase":
        """Replace the text content."""
        self.text_content = text
        return self

    def append_text(self, run: TextValue) -> "ElementBase":
        """Add a text run, separated from existing text by a single space."""
        if not self.text_content:
            self.text_content = run
        else:
            self.text_content = f"{self.text_content} {run}"
        return self

    # Conversion and traversal

    def into_owned(self) -> "Element":
        """Deep-copy this tree into owned :class:`Element` objects.

        On an owned tree this is a deep copy.
        """
        owned = Element(str(self.name), map_strategy=self.map_strategy)
        for key, value in self.attributes.items():
            owned.attributes[str(key)] = str(value)
        owned.text_content = str(self.text_content)
        owned.children = [child.into_owned() for child in self.children]
        return owned

    def iter(self) -> Iterator[Any]:
        """Walk this element and its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "name": str(self.name),
            "attributes": {
                str(key): str(value) for key, value in self.attributes.items()
            },
        }
        if self.text_content:
            result["text"] = str(self.text_content)
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ElementBase):
            return NotImplemented
        return (
            self.name == other.name
            and self.text_content == other.text_content
            and len(self.attributes) == len(other.attributes)
            and all(
                key in other.attributes and other.attributes[key] == value
                for key, value in self.attributes.items()
            )
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        text = str(self.text_content)
        if len(text) > REPR_TEXT_LENGTH:
            text = text[:REPR_TEXT_LENGTH] + "..."
        return (
            f"{type(self).__name__}({str(self.name)!r}, text={text!r}, "
            f"attributes={len(self.attributes)}, children={len(self.children)})"
        )

    def __str__(self) -> str:
        return format_element(self)


class ElementRef(ElementBase):
    """Element whose strings are views into the parsed source text."""

    __slots__ = ()


class Element(ElementBase):
    """Owned element, easy to create and manipulate.

    Example:
        >>> item = Element("Item").set_attr("name", "sword").set_text("sharp")
        >>> str(Element("Entity").append_child(item))
        '<Entity>\\n    <Item name="sword">\\n        sharp\\n    </Item>\\n</Entity>'
    """

    __slots__ = ()

    def __init__(
        self, name: str, map_strategy: MapStrategy = MapStrategy.ORDERED
    ) -> None:
        super().__init__(str(name), map_strategy)

    def set_attr(self, key: TextValue, value: TextValue) -> "Element":
        """Set an attribute, replacing any previous value for ``key``."""
        self.attributes[str(key)] = str(value)
        return self

    def set_text(self, text: TextValue) -> "Element":
        """Replace the text content."""
        self.text_content = str(text)
        return self

    def append_text(self, run: TextValue) -> "Element":
        """Add a text run, separated from existing text by a single space."""
        super().append_text(str(run))
        return self

    def append_child(self, child: ElementBase) -> "Element":
        """Append an owned child element."""
        if isinstance(child, ElementRef):
            raise TypeError(
                "Cannot append a borrowing element to an owned tree; "
                "call into_owned() first"
            )
        super().append_child(child)
        return self
