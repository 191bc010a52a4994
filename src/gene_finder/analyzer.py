"""Gene finding and composition statistics for DNA sequences."""

import logging
import threading
from typing import Dict, List, Optional, Union

from .logging_config import LogTimer
from .models import AnalysisSummary, Gene
from .sequence import DNASequence

logger = logging.getLogger(__name__)

START_CODON = "ATG"
STOP_CODONS = ("TAA", "TAG", "TGA")
_STOP_CODON_SET = frozenset(STOP_CODONS)

_COMPLEMENT = str.maketrans("ATGC", "TACG")


class DNAAnalyzer:
    """Finds genes in a DNA sequence and computes sequence statistics."""

    def __init__(self, dna_sequence: Union[str, DNASequence]):
        """
        Initialize the analyzer.

        Args:
            dna_sequence: Sequence text or a validated DNASequence
        """
        self._origin = ""
        if isinstance(dna_sequence, DNASequence):
            self._origin = dna_sequence.origin
            dna_sequence = dna_sequence.sequence

        self._dna_sequence = dna_sequence.upper()
        self._genes: Optional[List[Gene]] = None
        self._lock = threading.Lock()

    @property
    def dna_sequence(self) -> str:
        return self._dna_sequence

    def find_genes(self) -> List[Gene]:
        """
        Find all genes in the sequence.

        Every ATG starts an independent scan in its own reading frame that
        ends at the first in-frame stop codon. Starts without a reachable
        stop codon produce no gene. Genes may overlap.

        Returns:
            Genes sorted by start index; the same list on every call
        """
        if self._genes is not None:
            return self._genes

        with self._lock:
            if self._genes is None:
                with LogTimer("Gene scan", logger):
                    genes = []
                    for start_pos in self._find_codon_positions(START_CODON):
                        gene = self._find_gene_from_start(start_pos)
                        if gene is not None:
                            genes.append(gene)

                    genes.sort(key=lambda gene: gene.start_index)

                logger.debug(f"Found {len(genes)} genes in {len(self._dna_sequence):,} bp")
                self._genes = genes

        return self._genes

    def _find_gene_from_start(self, start_pos: int) -> Optional[Gene]:
        """Extend a reading frame from a start codon to the first stop codon."""
        read_pos = start_pos + 3

        while read_pos + 3 <= len(self._dna_sequence):
            codon = self._dna_sequence[read_pos:read_pos + 3]

            if codon in _STOP_CODON_SET:
                return Gene(
                    start_index=start_pos,
                    stop_index=read_pos,
                    start_codon=START_CODON,
                    stop_codon=codon,
                    sequence=self._dna_sequence[start_pos:read_pos + 3]
                )

            read_pos += 3

        return None

    def _find_codon_positions(self, codon: str) -> List[int]:
        """Return every index where ``codon`` occurs, overlaps included."""
        positions = []
        index = self._dna_sequence.find(codon)

        while index != -1:
            positions.append(index)
            index = self._dna_sequence.find(codon, index + 1)

        return positions

    def calculate_gc_content(self) -> float:
        """Percentage of G and C nucleotides in the sequence."""
        gc_count = self._dna_sequence.count('G') + self._dna_sequence.count('C')
        return (gc_count * 100.0) / len(self._dna_sequence)

    def get_nucleotide_counts(self) -> Dict[str, int]:
        """Count each nucleotide; A, T, G and C are always present."""
        counts = {'A': 0, 'T': 0, 'G': 0, 'C': 0}

        for nucleotide in self._dna_sequence:
            counts[nucleotide] = counts.get(nucleotide, 0) + 1

        return counts

    def get_reverse_complement(self) -> str:
        """Reverse complement of the sequence (A<->T, G<->C)."""
        return self._dna_sequence.translate(_COMPLEMENT)[::-1]

    def get_longest_gene(self) -> Optional[Gene]:
        """Longest gene, the earliest one on ties, or None without genes."""
        genes = self.find_genes()
        if not genes:
            return None

        return max(genes, key=lambda gene: gene.length)

    def get_codon_statistics(self) -> Dict[str, int]:
        """Count start and stop codon occurrences regardless of frame."""
        codon_counts = {START_CODON: len(self._find_codon_positions(START_CODON))}

        for stop_codon in STOP_CODONS:
            codon_counts[stop_codon] = len(self._find_codon_positions(stop_codon))

        return codon_counts

    def summarize(self) -> AnalysisSummary:
        """Collect all statistics into a single summary."""
        return AnalysisSummary(
            length=len(self._dna_sequence),
            gc_content=self.calculate_gc_content(),
            nucleotide_counts=self.get_nucleotide_counts(),
            codon_counts=self.get_codon_statistics(),
            genes=self.find_genes(),
            longest_gene=self.get_longest_gene(),
            origin=self._origin
        )
