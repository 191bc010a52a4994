"""Reading and writing sequence files."""

import logging
from pathlib import Path
from typing import Union

from Bio.Seq import Seq
from Bio.SeqIO.FastaIO import FastaWriter
from Bio.SeqRecord import SeqRecord

logger = logging.getLogger(__name__)

# Line prefixes for FASTA headers and comments
HEADER_PREFIXES = ('>', ';')

FASTA_LINE_WIDTH = 80


def load_sequence_text(file_path: Union[str, Path]) -> str:
    """Read sequence content from a plain or FASTA-style text file.

    Header and comment lines are skipped, every other line is stripped and
    concatenated in order.

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read or decoded
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    parts = []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.rstrip('\r\n')
                if line.startswith(HEADER_PREFIXES):
                    continue
                parts.append(line.strip())
    except UnicodeDecodeError as e:
        raise OSError(f"Could not decode {file_path}: {e}") from e

    logger.debug(f"Read {len(parts)} sequence lines from {path}")
    return ''.join(parts)


def write_fasta(file_path: Union[str, Path],
                header: str,
                sequence: str,
                wrap: int = FASTA_LINE_WIDTH) -> Path:
    """Write a single-record FASTA file.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(file_path)
    record = SeqRecord(Seq(sequence), id=header, description='')

    with open(path, 'w', encoding='utf-8') as handle:
        writer = FastaWriter(handle, wrap=wrap, record2title=lambda rec: header)
        writer.write_file([record])

    logger.debug(f"Wrote {len(sequence)} bp to {path}")
    return path
