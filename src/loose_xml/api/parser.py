"""Parser API for loose-xml.

Progressive disclosure from module-level functions to a configured, reusable
parser object:

* :func:`parse` / :func:`parse_lenient` / :func:`parse_owned` for strings
* :func:`parse_file` for files on disk
* :class:`LooseXMLParser` for shared configuration, correlation IDs and
  metrics across many documents
"""

from pathlib import Path
from typing import Optional, Union

from loose_xml.shared import (
    LooseXMLConfig,
    ParseMetrics,
    ParserConfig,
    get_logger,
)
from loose_xml.tree import Element, ElementRef, LenientResult, TreeBuilder

PathLike = Union[str, Path]

# Max length for content preview in logs
PREVIEW_LENGTH = 100


def parse(text: str, config: Optional[ParserConfig] = None) -> ElementRef:
    """Parse a document strictly.

    Args:
        text: Complete document text
        config: Optional parser configuration

    Returns:
        Root element; its strings are views into ``text``

    Raises:
        ParseError: the first syntax error found

    Examples:
        >>> root = parse('<Entity name="player"><Item/></Entity>')
        >>> root.attr("name")
        'player'
        >>> root.child("Item").children
        []
    """
    return TreeBuilder(text, config).build()


def parse_lenient(
    text: str, config: Optional[ParserConfig] = None
) -> LenientResult:
    """Parse a document, recovering from every syntax error.

    Never raises :class:`~loose_xml.tree.ParseError`.

    Examples:
        >>> root, errors = parse_lenient("<A><B></A>")
        >>> [child.tag for child in root.children]
        ['B']
        >>> errors[0].kind
        'MismatchedClosingTag'
    """
    builder = TreeBuilder(text, config, lenient=True)
    root = builder.build()
    return LenientResult(root, builder.errors)


def parse_owned(text: str, config: Optional[ParserConfig] = None) -> Element:
    """Parse a document strictly into an owned tree."""
    return parse(text, config).into_owned()


def parse_file(
    file_path: PathLike,
    encoding: str = "utf-8",
    config: Optional[ParserConfig] = None,
    lenient: bool = False,
) -> Union[ElementRef, LenientResult]:
    """Read and parse a file.

    Args:
        file_path: Path to the document
        encoding: Text encoding of the file
        config: Optional parser configuration
        lenient: Return a :class:`LenientResult` instead of raising

    Raises:
        OSError: if the file cannot be read
        ParseError: in strict mode, for the first syntax error found
    """
    text = Path(file_path).read_text(encoding=encoding)
    if lenient:
        return parse_lenient(text, config)
    return parse(text, config)


class LooseXMLParser:
    """Configured parser that can be reused for many documents.

    Attributes:
        config: Complete configuration; only the ``parser`` section affects
            parsing
        correlation_id: Correlation ID stamped on log records
        last_metrics: Metrics of the most recent parse, if any

    Examples:
        >>> parser = LooseXMLParser(LooseXMLConfig.fast())
        >>> root = parser.parse('<A k="v"/>')
        >>> parser.last_metrics.elements_built
        1
    """

    def __init__(
        self,
        config: Optional[LooseXMLConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or LooseXMLConfig()
        self.correlation_id = correlation_id or self.config.logging.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "loose_xml_parser")
        self.last_metrics: Optional[ParseMetrics] = None
        self.parse_count = 0

    def parse(self, text: str) -> ElementRef:
        """Parse strictly, raising the first syntax error."""
        builder = self._builder(text, lenient=False)
        try:
            return builder.build()
        finally:
            self._record(builder)

    def parse_lenient(self, text: str) -> LenientResult:
        """Parse leniently, returning the tree and every error met."""
        builder = self._builder(text, lenient=True)
        try:
            root = builder.build()
        finally:
            self._record(builder)
        return LenientResult(root, builder.errors)

    def parse_owned(self, text: str) -> Element:
        """Parse strictly into an owned tree."""
        return self.parse(text).into_owned()

    def parse_file(
        self, file_path: PathLike, encoding: str = "utf-8", lenient: bool = False
    ) -> Union[ElementRef, LenientResult]:
        """Read and parse a file with this parser's configuration."""
        path = Path(file_path)
        self.logger.info(
            "Parsing file", extra={"file_path": str(path), "lenient": lenient}
        )
        text = path.read_text(encoding=encoding)
        if lenient:
            return self.parse_lenient(text)
        return self.parse(text)

    def _builder(self, text: str, lenient: bool) -> TreeBuilder:
        self.logger.debug(
            "Starting parse",
            extra={
                "content_length": len(text),
                "preview": text[:PREVIEW_LENGTH],
                "lenient": lenient,
            },
        )
        return TreeBuilder(
            text,
            self.config.parser,
            lenient=lenient,
            correlation_id=self.correlation_id,
        )

    def _record(self, builder: TreeBuilder) -> None:
        self.parse_count += 1
        self.last_metrics = builder.metrics
