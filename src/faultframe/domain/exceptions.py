"""Domain exceptions: all public errors of faultframe.

Raised errors never escape parse_error(). They exist so that the
pipeline stages can signal failure to the stage that absorbs it.
"""


class FaultFrameError(Exception):
    """Base for all faultframe exceptions.

    Allows: except FaultFrameError to catch all library errors.
    """


class StackExtractionError(FaultFrameError):
    """Extractor could not turn an error-like value into stack entries.

    Always absorbed by ChainedExtractor (treated as "no stack").
    """


class ConversionError(StackExtractionError, TypeError):
    """Stack attribute held a value of an unexpected type.

    Inherits TypeError for semantic correctness (expected type X, got Y).

    Attributes:
        expected: Description of expected type(s).
        got: Actual type received.
    """

    def __init__(self, *, expected: str, got: type) -> None:
        """Initialize with expected type description and actual type."""
        self.expected = expected
        self.got = got
        super().__init__(f"{expected}, got {got.__name__}")
