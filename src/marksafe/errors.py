"""Exception classes for marksafe.

Provides standardized exceptions for error handling throughout marksafe.

Conversion never raises by default: the Parser and Sanitizer catch internal
failures at their boundary and degrade to escaped text. These types surface
only in strict mode (see ParseConfig.strict / SanitizeConfig.strict) or when
a policy is constructed with invalid settings.
"""

from __future__ import annotations


class MarksafeError(Exception):
    """Base exception for all marksafe errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(MarksafeError):
    """Internal failure while transforming source text to markup.

    Raised only in strict mode; otherwise the parser degrades to escaped
    plain text.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        pass_name: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            pass_name: Name of the rewrite pass that failed (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.pass_name = pass_name

        location = ""
        if pass_name:
            location = f"[{pass_name}]:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class SanitizeError(MarksafeError):
    """Internal failure while building or walking the markup tree.

    Raised only in strict mode; otherwise the sanitizer degrades to the
    fully escaped input.
    """

    def __init__(self, message: str, stage: str | None = None) -> None:
        """Initialize sanitize error.

        Args:
            message: Error description
            stage: Sanitizer stage that failed (e.g., "strike", "allow-list")
        """
        self.stage = stage
        prefix = f"Sanitizer stage '{stage}': " if stage else ""
        super().__init__(f"{prefix}{message}")


class UrlPolicyError(MarksafeError):
    """Invalid URL policy configuration.

    Raised when a UrlPolicy is built with an empty or malformed scheme set.
    """

    def __init__(self, scheme: str | None, message: str) -> None:
        """Initialize URL policy error.

        Args:
            scheme: The offending scheme, if any
            message: Description of the problem
        """
        self.scheme = scheme
        subject = f"Scheme {scheme!r}: " if scheme is not None else ""
        super().__init__(f"{subject}{message}")
