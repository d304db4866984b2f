"""Render element trees back to text.

The output re-parses into an equal tree: attributes keep their map order, and
names, keys and text that would not survive tokenizing bare are quoted.
Elements without text or children are written self-closing unless configured
otherwise. Strings containing a double quote cannot be quoted and are written
bare.
"""

from typing import TYPE_CHECKING, List, Optional

from loose_xml.shared.config import FormatConfig
from loose_xml.tokenization.tokenizer import PUNCTUATION, WHITESPACE

if TYPE_CHECKING:
    from .element import ElementBase

_DEFAULT_CONFIG = FormatConfig()


def format_element(
    element: "ElementBase", config: Optional[FormatConfig] = None
) -> str:
    """Render ``element`` and its descendants.

    Args:
        element: Root of the tree to render (borrowing or owned)
        config: Indentation, line separator and self-closing settings

    Returns:
        Text that parses back into an equal tree
    """
    parts: List[str] = []
    _write_element(parts, element, 0, config or _DEFAULT_CONFIG)
    return "".join(parts)


def format_text(text: str) -> str:
    """Quote a text run unless writing it bare parses back to the same text.

    Bare content is split at whitespace and markup characters and the pieces
    are re-joined with single spaces, so any other spacing needs quotes.
    """
    if '"' in text:
        return text
    if any(ch in PUNCTUATION for ch in text) or text != " ".join(text.split()):
        return f'"{text}"'
    return text


def format_name(name: str) -> str:
    """Quote an element name or attribute key unless it is one bare token."""
    if '"' in name:
        return name
    if not name or any(ch in PUNCTUATION or ch in WHITESPACE for ch in name):
        return f'"{name}"'
    return name


def _format_value(value: str) -> str:
    # A bare value containing a quote is still a single token
    if '"' in value:
        return value
    return f'"{value}"'


def _write_element(
    parts: List[str], element: "ElementBase", depth: int, config: FormatConfig
) -> None:
    padding = " " * (depth * config.indent)
    name = format_name(str(element.name))
    parts.append(f"{padding}<{name}")

    for key, value in element.attributes.items():
        parts.append(f" {format_name(str(key))}={_format_value(str(value))}")

    text = str(element.text_content)
    if not element.children and not text:
        parts.append("/>" if config.self_close else f"></{name}>")
        return

    parts.append(">")
    parts.append(config.line_separator)

    if text:
        inner_padding = " " * ((depth + 1) * config.indent)
        parts.append(f"{inner_padding}{format_text(text)}")
        parts.append(config.line_separator)

    for child in element.children:
        _write_element(parts, child, depth + 1, config)
        parts.append(config.line_separator)

    parts.append(f"{padding}</{name}>")
