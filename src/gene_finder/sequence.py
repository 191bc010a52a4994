"""Validated DNA sequence representation."""

import logging
import re
from pathlib import Path
from typing import Optional, Union

from .sequence_io import load_sequence_text, write_fasta

logger = logging.getLogger(__name__)

VALID_NUCLEOTIDES = frozenset('ATGC')

# Whitespace, digits and separators are formatting noise, not content
_NOISE_PATTERN = re.compile(r'[\s\d\-_]')


class InvalidSequenceError(ValueError):
    """Raised when sequence text is empty or contains invalid characters."""

    def __init__(self, message: str,
                 character: Optional[str] = None,
                 position: Optional[int] = None):
        super().__init__(message)
        self.character = character
        self.position = position


class DNASequence:
    """An immutable DNA sequence restricted to A, T, G and C."""

    DIRECT_INPUT = "Direct input"

    def __init__(self, sequence: str, origin: str = DIRECT_INPUT):
        """
        Clean and validate a DNA sequence.

        Args:
            sequence: Raw sequence text; whitespace, digits, hyphens and
                underscores are ignored
            origin: Description of where the sequence came from

        Raises:
            InvalidSequenceError: If nothing is left after cleaning or an
                invalid nucleotide is present
        """
        cleaned = self._clean(sequence or '')
        self._validate(cleaned)

        self._sequence = cleaned.upper()
        self._origin = origin

    @classmethod
    def from_string(cls, sequence: str) -> 'DNASequence':
        """Create a sequence from directly entered text."""
        return cls(sequence, cls.DIRECT_INPUT)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'DNASequence':
        """
        Load a sequence from a plain text or FASTA file.

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
            InvalidSequenceError: If the file content is not a valid sequence
        """
        content = load_sequence_text(file_path)
        sequence = cls(content, f"File: {file_path}")
        logger.info(f"Loaded {sequence.length:,} bp from {file_path}")
        return sequence

    @staticmethod
    def _clean(sequence: str) -> str:
        return _NOISE_PATTERN.sub('', sequence)

    @staticmethod
    def _validate(sequence: str) -> None:
        if not sequence:
            raise InvalidSequenceError("DNA sequence cannot be empty")

        for position, nucleotide in enumerate(sequence):
            if nucleotide.upper() not in VALID_NUCLEOTIDES:
                raise InvalidSequenceError(
                    f"Invalid nucleotide '{nucleotide}' at position {position}. "
                    f"Only A, T, G, C are allowed.",
                    character=nucleotide,
                    position=position
                )

    @property
    def sequence(self) -> str:
        return self._sequence

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def length(self) -> int:
        return len(self._sequence)

    def save_to_file(self, file_path: Union[str, Path], header: str) -> Path:
        """Save the sequence in FASTA format, 80 bases per line."""
        path = write_fasta(file_path, header, self._sequence)
        logger.info(f"Saved sequence to {path}")
        return path

    def preview(self, length: int) -> str:
        """Return the first and last ``length`` bases joined by an ellipsis."""
        if self.length <= length * 2:
            return self._sequence
        return f"{self._sequence[:length]}...{self._sequence[self.length - length:]}"

    def __len__(self) -> int:
        return self.length

    def __str__(self) -> str:
        if self.length <= 100:
            return self._sequence
        return f"{self._sequence[:50]}...{self._sequence[-47:]} ({self.length:,} bp)"

    def __repr__(self) -> str:
        return f"DNASequence({self.preview(10)!r}, origin={self._origin!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, DNASequence):
            return NotImplemented
        return (self._sequence, self._origin) == (other._sequence, other._origin)

    def __hash__(self) -> int:
        return hash((self._sequence, self._origin))
