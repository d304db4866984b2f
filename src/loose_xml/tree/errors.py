"""Syntax errors reported while building element trees.

Every error records the tokenizer position at the moment it was detected. In
strict mode the first one is raised; in lenient mode they are collected and
returned alongside the best-effort tree.
"""

from typing import Any, Dict, Optional

from loose_xml.shared.result import DiagnosticEntry, DiagnosticSeverity
from loose_xml.tokenization import Position


class ParseError(Exception):
    """Base class for syntax errors in loose-xml documents."""

    def __init__(self, position: Position) -> None:
        self.position = position
        super().__init__(f"{self.message} [{position}]")

    @property
    def kind(self) -> str:
        """Name of the error category."""
        return type(self).__name__

    @property
    def message(self) -> str:
        """Human-readable description without the position."""
        raise NotImplementedError

    @property
    def context(self) -> Dict[str, Any]:
        """Tag and attribute names the error refers to."""
        return {}

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.position == other.position
            and self.context == other.context
        )

    __hash__ = Exception.__hash__

    def __repr__(self) -> str:
        fields = "".join(f", {key}={value!r}" for key, value in self.context.items())
        return f"{self.kind}(position={self.position}{fields})"

    def to_diagnostic(
        self,
        severity: DiagnosticSeverity = DiagnosticSeverity.ERROR,
        correlation_id: Optional[str] = None,
    ) -> DiagnosticEntry:
        """Convert the error to a diagnostic entry."""
        details: Dict[str, Any] = {"kind": self.kind}
        details.update(self.context)
        return DiagnosticEntry(
            severity=severity,
            message=self.message,
            component="tree_builder",
            position=self.position.to_dict(),
            details=details,
            correlation_id=correlation_id,
        )


class NoOpeningSymbolFound(ParseError):
    """The document does not start with ``<``."""

    @property
    def message(self) -> str:
        return "Couldn't find a '<' to start parsing with"


class MissingElementName(ParseError):
    """A ``<`` is not followed by an element name."""

    @property
    def message(self) -> str:
        return "Expected a name of the element after <"


class _AttributeSyntaxError(ParseError):
    def __init__(self, tag: str, attribute: str, position: Position) -> None:
        self.tag = tag
        self.attribute = attribute
        super().__init__(position)

    @property
    def context(self) -> Dict[str, Any]:
        return {"tag": self.tag, "attribute": self.attribute}


class MissingEqualsSign(_AttributeSyntaxError):
    """An attribute name is not followed by ``=``."""

    @property
    def message(self) -> str:
        return f"parsing tag '{self.tag}', attribute '{self.attribute}' - expected '='"


class MissingAttributeValue(_AttributeSyntaxError):
    """An ``=`` is not followed by a string value."""

    @property
    def message(self) -> str:
        return (
            f"parsing tag '{self.tag}', attribute '{self.attribute}' - "
            'expected a "string" after =, but none found'
        )


class MismatchedClosingTag(ParseError):
    """A closing tag names a different element than the one that is open."""

    def __init__(self, expected: str, got: str, position: Position) -> None:
        self.expected = expected
        self.got = got
        super().__init__(position)

    @property
    def context(self) -> Dict[str, Any]:
        return {"expected": self.expected, "got": self.got}

    @property
    def message(self) -> str:
        return (
            "Closing element is in wrong order. "
            f"Expected '</{self.expected}>', but instead got '{self.got}'"
        )


class NoClosingSymbolFound(ParseError):
    """A matching closing tag is not terminated by ``>``."""

    def __init__(self, element: str, position: Position) -> None:
        self.element = element
        super().__init__(position)

    @property
    def context(self) -> Dict[str, Any]:
        return {"element": self.element}

    @property
    def message(self) -> str:
        return f"No closing '>' found for ending element </{self.element}>"


class NestingTooDeep(ParseError):
    """A child element would exceed the configured maximum depth."""

    def __init__(self, element: str, limit: int, position: Position) -> None:
        self.element = element
        self.limit = limit
        super().__init__(position)

    @property
    def context(self) -> Dict[str, Any]:
        return {"element": self.element, "limit": self.limit}

    @property
    def message(self) -> str:
        return (
            f"Element <{self.element}> cannot open a child element: "
            f"maximum nesting depth of {self.limit} reached"
        )
