from __future__ import annotations

"""
Dependency Analysis Error Types.

Defines the failures raised while turning formula source into dependency
nodes. Analysis errors mean a dependency exists but cannot be determined
statically; syntax errors mean the formula could not be parsed at all.
"""

from typing import Optional


# -----------------------------------------------------------------------------
# ANALYSIS ERRORS
# -----------------------------------------------------------------------------

class DependencyError(Exception):
    """Base class for failures of the static dependency analysis."""


class AmbiguousIndexError(DependencyError):
    """
    Raised when a bracket indexer uses a key that is not a literal.

    Attributes:
        expression: Source text of the offending index expression.
    """

    def __init__(self, expression: str) -> None:
        self.expression = expression
        super().__init__(
            f"Cannot determine the member accessed by the indexer '[{expression}]'. "
            "Only string and number literals are supported."
        )


class AmbiguousDependencyError(DependencyError):
    """
    Raised when a built-in query function receives a name argument that
    is not a string literal.

    Attributes:
        function: Dotted name of the built-in function.
        position: Zero-based index of the required argument.
    """

    def __init__(self, function: str, position: int, reason: str = "is not a string literal") -> None:
        self.function = function
        self.position = position
        super().__init__(
            f"Cannot determine the dependency of '{function}()': "
            f"argument {position + 1} {reason}."
        )


# -----------------------------------------------------------------------------
# PARSE ERRORS
# -----------------------------------------------------------------------------

class FormulaSyntaxError(SyntaxError):
    """
    Raised when the formula source cannot be parsed.

    Line and column numbers are 1-based. Sigil rewriting never spans
    lines, so line numbers match the formula as written while columns refer
    to the text as it was handed to the parser.
    """

    def __init__(
            self,
            message: str,
            lineno: Optional[int] = None,
            offset: Optional[int] = None,
            text: Optional[str] = None,
    ) -> None:
        super().__init__(message, ("<formula>", lineno, offset, text))
