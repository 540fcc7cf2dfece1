"""
Exception hierarchy for the source map analysis pipeline.

Two families matter to callers:

*   `DiscoveryError`: the root path of a batch could not be listed. Fatal for the whole batch.
*   `SourceMapError` and its subclasses: something is wrong with one generated file or its map.
    Fatal for that file only; batch runners capture these and keep going.
"""

from typing import Optional


class SvisError(Exception):
    """
    Base class for every error raised by svis.

    Attributes:
        message: Human-readable cause.
        path: The file (or root path) the error relates to, if known.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class DiscoveryError(SvisError):
    """The batch root path is missing or unreadable."""


class SourceMapError(SvisError):
    """Base class for per-file analysis failures."""


class GeneratedFileError(SourceMapError):
    """The generated file itself cannot be read or is not valid UTF-8."""


class EmptyFileError(SourceMapError):
    pass


class UnsupportedFormatError(SourceMapError):
    """The last line is not a `//# sourceMappingURL=` directive."""


class InlineSourceMapError(SourceMapError):
    """A data-URI source map lacks the `base64,` marker or carries an invalid payload."""


class ExternalSourceMapError(SourceMapError):
    """The referenced `.map` file is missing or unreadable."""


class SourceMapJSONError(SourceMapError):
    """Malformed JSON, or JSON that does not have the source map shape."""


class VLQDecodeError(SourceMapError):
    """
    A mapping segment could not be decoded.

    Attributes:
        segment: The offending base64 run.
        reason: Short machine-friendly cause ("unterminated sequence", "wrong field count", ...).
    """

    def __init__(self, message: str, segment: str = "", reason: str = "", path: Optional[str] = None):
        super().__init__(message, path=path)
        self.segment = segment
        self.reason = reason


class AttributionError(SourceMapError):
    """The mapping table contradicts the generated file (e.g. an end column before its start column)."""
