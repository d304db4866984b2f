"""Element tree data model and tree building for loose-xml.

Key Components:
    TreeBuilder: Recursive-descent parser producing ElementRef trees
    ElementRef: Borrowing element whose strings are views into the source
    Element: Owned element for building and editing trees by hand
    ParseError: Base class of the syntax errors reported by TreeBuilder
    format_element: Renders a tree back to text
"""

from .attributes import HashedAttributes, new_attribute_map, strategy_of
from .builder import LenientResult, TreeBuilder
from .element import Element, ElementBase, ElementRef
from .errors import (
    MismatchedClosingTag,
    MissingAttributeValue,
    MissingElementName,
    MissingEqualsSign,
    NestingTooDeep,
    NoClosingSymbolFound,
    NoOpeningSymbolFound,
    ParseError,
)
from .formatting import format_element, format_name, format_text

__all__ = [
    "Element",
    "ElementBase",
    "ElementRef",
    "HashedAttributes",
    "LenientResult",
    "MismatchedClosingTag",
    "MissingAttributeValue",
    "MissingElementName",
    "MissingEqualsSign",
    "NestingTooDeep",
    "NoClosingSymbolFound",
    "NoOpeningSymbolFound",
    "ParseError",
    "TreeBuilder",
    "format_element",
    "format_name",
    "format_text",
    "new_attribute_map",
    "strategy_of",
]
