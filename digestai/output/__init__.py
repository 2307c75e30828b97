"""Output subsystem — language tags and the streaming digest writer."""

from digestai.output.languages import DEFAULT_LANGUAGE, language_for
from digestai.output.writer import DigestResult, DigestWriter

__all__ = [
    "DEFAULT_LANGUAGE",
    "DigestResult",
    "DigestWriter",
    "language_for",
]
