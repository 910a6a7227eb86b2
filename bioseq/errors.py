"""
Exception types raised by bioseq.

Malformed input and bad coordinates subclass ValueError, missing
sequences subclass KeyError, so callers that already catch the
built-in types keep working. Operating-system failures are never
wrapped: they surface as the usual OSError family.
"""


class BioSeqError(Exception):
    """Base class for all bioseq errors."""


class FormatError(BioSeqError, ValueError):
    """Input file is structurally invalid (header, record or line width)."""


class SequenceNotFoundError(BioSeqError, KeyError):
    """A sequence name is not present in the index."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class BoundaryError(BioSeqError, ValueError):
    """Region coordinates fall outside the sequence or are inverted."""


class UnsupportedOperationError(BioSeqError, NotImplementedError):
    """The adapter does not offer the requested capability."""
