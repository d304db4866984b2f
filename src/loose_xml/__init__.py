"""loose-xml.

Reader and writer for the loosely XML-like text format used by game entity
definitions. Parsing never copies the source text: the resulting tree holds
views into it until converted with ``into_owned()``.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_lenient(), parse_owned(), parse_file()
- Level 2: Configured parser - LooseXMLParser class
"""

__version__ = "0.1.0"
__author__ = "loose-xml developers"

from .api import LooseXMLParser, parse, parse_file, parse_lenient, parse_owned
from .shared.config import FormatConfig, LooseXMLConfig, MapStrategy, ParserConfig
from .tree import (
    Element,
    ElementRef,
    LenientResult,
    ParseError,
    format_element,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_lenient",
    "parse_owned",
    "parse_file",

    # Level 2: Configured parser
    "LooseXMLParser",

    # Data model and results
    "Element",
    "ElementRef",
    "LenientResult",
    "ParseError",
    "format_element",

    # Configuration
    "FormatConfig",
    "LooseXMLConfig",
    "MapStrategy",
    "ParserConfig",
]
