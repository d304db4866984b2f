"""Public parsing API for loose-xml."""

from .parser import (
    LooseXMLParser,
    parse,
    parse_file,
    parse_lenient,
    parse_owned,
)

__all__ = [
    "LooseXMLParser",
    "parse",
    "parse_file",
    "parse_lenient",
    "parse_owned",
]
