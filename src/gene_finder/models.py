"""Data models for the DNA gene finder."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from Bio.Seq import translate


@dataclass(frozen=True)
class Gene:
    """Represents an open reading frame found in a DNA sequence."""

    start_index: int
    stop_index: int  # Offset of the stop codon's first base
    start_codon: str
    stop_codon: str
    sequence: str

    @property
    def length(self) -> int:
        """Length in base pairs, start and stop codons included."""
        return len(self.sequence)

    @property
    def end_index(self) -> int:
        """Offset of the last base of the stop codon."""
        return self.stop_index + 2

    @property
    def codon_count(self) -> int:
        """Number of codons in this gene."""
        return self.length // 3

    @property
    def gc_content(self) -> float:
        """Percentage of G and C nucleotides in this gene."""
        gc_count = self.sequence.count('G') + self.sequence.count('C')
        return (gc_count * 100.0) / self.length

    @property
    def protein(self) -> str:
        """Amino acid translation up to, not including, the stop codon."""
        return translate(self.sequence, to_stop=True)

    def __str__(self) -> str:
        return (
            f"Gene[{self.start_index}-{self.end_index}] "
            f"{self.start_codon}...{self.stop_codon} "
            f"({self.length} bp, {self.gc_content:.1f}% GC)"
        )


@dataclass
class AnalysisSummary:
    """Aggregate statistics for one analyzed sequence."""

    length: int
    gc_content: float
    nucleotide_counts: Dict[str, int]
    codon_counts: Dict[str, int]
    genes: List[Gene] = field(default_factory=list)
    longest_gene: Optional[Gene] = None
    origin: str = ""

    @property
    def gene_count(self) -> int:
        return len(self.genes)

    @property
    def total_coding_length(self) -> int:
        """Sum of gene lengths; overlapping genes are counted separately."""
        return sum(gene.length for gene in self.genes)

    @property
    def coding_percentage(self) -> float:
        if not self.length:
            return 0.0
        return (self.total_coding_length * 100.0) / self.length

    @property
    def average_gene_length(self) -> float:
        if not self.genes:
            return 0.0
        return self.total_coding_length / len(self.genes)

    def nucleotide_percentage(self, base: str) -> float:
        """Percentage of the sequence made up of a single nucleotide."""
        if not self.length:
            return 0.0
        return (self.nucleotide_counts.get(base, 0) * 100.0) / self.length
