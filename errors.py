"""
Error types raised while loading and analyzing performance files
"""


class AnalyzerError(Exception):
    """Base error. The message is shown to the user as-is."""


class FormatError(AnalyzerError):
    """File does not have the structure expected for its slot."""


class WrongSlotError(FormatError):
    """File looks like it belongs in the other upload area."""

    def __init__(self, message, expected_slot):
        super().__init__(message)
        self.expected_slot = expected_slot


class DuplicateFileError(AnalyzerError):
    """A file with the same name is already loaded in this slot."""


class SummaryError(AnalyzerError):
    """The AI summary could not be generated or was malformed."""
