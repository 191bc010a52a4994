"""DNA Gene Finder.

Scan nucleotide sequences for open reading frames and report their
composition statistics.
"""

__version__ = "1.0.0"
__author__ = "Austin P. Morrissey"
