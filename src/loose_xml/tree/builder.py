"""Recursive-descent tree builder for loose-xml.

Grammar::

    element := '<' name attr* ( '/>' | '>' content '</' name '>' )
    attr    := name '=' string
    content := (text | element)*

One stack frame per nesting level. Strict and lenient parsing run the same code;
the only difference is what :meth:`TreeBuilder._report` does with an error.
End of input is never an error: it closes every open element.
"""

import time
from typing import List, NamedTuple, Optional

from loose_xml.shared import ParseMetrics, ParserConfig, get_logger
from loose_xml.tokenization import Tokenizer, TokenKind

from .element import ElementRef
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

MS_PER_SECOND = 1000


class LenientResult(NamedTuple):
    """Best-effort tree and every syntax error met while building it."""

    root: ElementRef
    errors: List[ParseError]

    @property
    def ok(self) -> bool:
        """True when the document parsed without any error."""
        return not self.errors


class TreeBuilder:
    """Builds an :class:`ElementRef` tree from a source string.

    A builder is single-use: create one per document.
    """

    def __init__(
        self,
        source: str,
        config: Optional[ParserConfig] = None,
        lenient: bool = False,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize tree builder.

        Args:
            source: Complete document text
            config: Map strategy and nesting limit
            lenient: Collect errors and keep going instead of raising
            correlation_id: Optional correlation ID for request tracking
        """
        self.source = source
        self.config = config or ParserConfig()
        self.lenient = lenient
        self.errors: List[ParseError] = []
        self.metrics = ParseMetrics(characters_processed=len(source))
        self.logger = get_logger(__name__, correlation_id, "tree_builder")
        self._tokenizer = Tokenizer(source)

    def build(self) -> ElementRef:
        """Parse the document and return its root element.

        Raises:
            ParseError: in strict mode, for the first syntax error found
        """
        self.logger.debug(
            "Starting tree building",
            extra={"content_length": len(self.source), "lenient": self.lenient},
        )
        start_time = time.perf_counter()
        try:
            root = self._parse_element(depth=1, opening_consumed=False)
        finally:
            self.metrics.processing_time_ms = (
                (time.perf_counter() - start_time) * MS_PER_SECOND
            )
            self.metrics.tokens_generated = self._tokenizer.tokens_generated

        self.logger.debug("Tree building completed", extra=self.metrics.to_dict())
        return root

    def _report(self, error: ParseError) -> None:
        """Raise ``error`` in strict mode, record it in lenient mode."""
        self.metrics.error_count += 1
        if not self.lenient:
            self.logger.info(
                "Strict parse failed",
                extra={"kind": error.kind, "position": str(error.position)},
            )
            raise error

        self.errors.append(error)
        self.logger.debug(
            "Recovered from syntax error",
            extra={"kind": error.kind, "position": str(error.position)},
        )

    def _parse_element(self, depth: int, opening_consumed: bool) -> ElementRef:
        """Parse one element; children recurse with ``opening_consumed``."""
        tokenizer = self._tokenizer
        self.metrics.elements_built += 1
        self.metrics.max_depth = max(self.metrics.max_depth, depth)

        if not opening_consumed and tokenizer.next_token().kind is not TokenKind.OPEN:
            self._report(NoOpeningSymbolFound(tokenizer.position()))

        token = tokenizer.next_token()
        if token.kind is TokenKind.STRING:
            element = ElementRef(token.view, map_strategy=self.config.map_strategy)
        else:
            self._report(MissingElementName(tokenizer.position()))
            element = ElementRef("", map_strategy=self.config.map_strategy)

        if not self._parse_attributes(element):
            return element
        return self._parse_content(element, depth)

    def _parse_attributes(self, element: ElementRef) -> bool:
        """Read attributes up to the end of the opening tag.

        Returns:
            True if content follows, False if the element is already complete
            (self-closing or end of input)
        """
        tokenizer = self._tokenizer
        while True:
            token = tokenizer.next_token()
            kind = token.kind

            if kind is TokenKind.EOF:
                return False
            if kind is TokenKind.SLASH:
                # A lone '/' is not a self-close; whatever follows is content
                return not tokenizer.take(">")
            if kind is TokenKind.CLOSE:
                return True
            if kind is not TokenKind.STRING:
                continue

            attribute = token.view
            if tokenizer.next_token().kind is not TokenKind.EQUAL:
                self._report(MissingEqualsSign(
                    str(element.name), str(attribute), tokenizer.position()
                ))
                continue

            value = tokenizer.next_token()
            if value.kind is not TokenKind.STRING:
                self._report(MissingAttributeValue(
                    str(element.name), str(attribute), tokenizer.position()
                ))
                continue

            element.attributes[attribute] = value.view

    def _parse_content(self, element: ElementRef, depth: int) -> ElementRef:
        """Read text and children until the closing tag or end of input."""
        tokenizer = self._tokenizer
        while True:
            token = tokenizer.next_token()
            if token.kind is TokenKind.EOF:
                return element

            if token.kind is not TokenKind.OPEN:
                element.append_text(token.view)
                continue

            if not tokenizer.take("/"):
                if depth >= self.config.max_depth:
                    self._report(NestingTooDeep(
                        str(element.name), self.config.max_depth, tokenizer.position()
                    ))
                    return element
                element.children.append(
                    self._parse_element(depth + 1, opening_consumed=True)
                )
                continue

            closing = tokenizer.next_token()
            if closing.kind is TokenKind.STRING and closing.view == element.name:
                if tokenizer.next_token().kind is TokenKind.CLOSE:
                    return element
                self._report(NoClosingSymbolFound(
                    str(closing.view), tokenizer.position()
                ))
            else:
                self._report(MismatchedClosingTag(
                    str(element.name), closing.text, tokenizer.position()
                ))
            # The subtree ends here, with or without a proper closing tag
            return element
