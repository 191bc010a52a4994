"""Report rendering and gene table export."""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import openpyxl
from openpyxl.styles import Font, PatternFill

from .analyzer import START_CODON, STOP_CODONS
from .models import AnalysisSummary, Gene

logger = logging.getLogger(__name__)

RULE = "─" * 65
DOUBLE_RULE = "═" * 63


class OutputFormatter:
    """Formats analysis results as text reports and gene tables."""

    # Column headers
    COLUMNS = [
        "Gene",
        "Start",
        "End",
        "Start Codon",
        "Stop Codon",
        "Length (bp)",
        "Codons",
        "GC Content (%)",
        "Protein",
        "Sequence"
    ]

    FORMATS = ('tsv', 'csv', 'json', 'excel')

    def format_report(self,
                      summary: AnalysisSummary,
                      max_genes: int = 10,
                      show_details: bool = False,
                      list_genes: bool = True) -> str:
        """
        Render the full analysis report.

        Args:
            summary: Analysis summary to render
            max_genes: Maximum number of genes listed individually
            show_details: Use the detailed block for each listed gene
            list_genes: Include the per-gene listing

        Returns:
            Report text
        """
        lines = [
            "",
            "╔═══════════════════════════════════════════════════════════════╗",
            "║              DNA SEQUENCE ANALYSIS REPORT                     ║",
            "╚═══════════════════════════════════════════════════════════════╝",
            "",
            "SEQUENCE INFORMATION:",
            RULE,
        ]

        if summary.origin:
            lines.append(f"  Source:           {summary.origin}")
        lines.append(f"  Total Length:     {summary.length:,} base pairs")
        lines.append(f"  GC Content:       {summary.gc_content:.2f}%")

        lines.append("")
        lines.append("  Nucleotide Composition:")
        lines.append(f"    {self._composition_cell(summary, 'A')}    {self._composition_cell(summary, 'T')}")
        lines.append(f"    {self._composition_cell(summary, 'G')}    {self._composition_cell(summary, 'C')}")

        lines.extend(["", "CODON STATISTICS:", RULE])
        lines.append(f"  Start Codons ({START_CODON}): {summary.codon_counts.get(START_CODON, 0):,} occurrences")
        lines.append("  Stop Codons:")
        for stop_codon in STOP_CODONS:
            lines.append(f"    {stop_codon}: {summary.codon_counts.get(stop_codon, 0):,} occurrences")

        lines.extend(["", "GENE ANALYSIS:", RULE])
        lines.append(f"  Total Genes Found: {summary.gene_count:,}")

        if summary.genes:
            longest = summary.longest_gene
            lines.append(f"  Coding Regions:    {summary.coding_percentage:.2f}% of sequence")
            lines.append(f"  Average Gene Size: {summary.average_gene_length:.0f} base pairs")
            lines.append(
                f"  Longest Gene:     {longest.length:,} base pairs "
                f"(at position {longest.start_index:,})"
            )

            if list_genes and max_genes > 0:
                lines.extend(["", "GENES:", RULE])
                for gene in summary.genes[:max_genes]:
                    if show_details:
                        lines.append(self.format_gene_details(gene).rstrip("\n"))
                    else:
                        lines.append(f"  {gene}")

                remaining = summary.gene_count - max_genes
                if remaining > 0:
                    lines.append(f"  ... and {remaining:,} more")

        lines.append("")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _composition_cell(summary: AnalysisSummary, base: str) -> str:
        count = summary.nucleotide_counts.get(base, 0)
        return f"{base}: {count:>7,} ({summary.nucleotide_percentage(base):.2f}%)"

    def format_gene_details(self, gene: Gene) -> str:
        """Render the detailed block for a single gene."""
        if gene.length <= 60:
            body = gene.sequence
        else:
            body = f"{gene.sequence[:30]}...{gene.sequence[-27:]}"

        lines = [
            DOUBLE_RULE,
            f"  Gene Position: {gene.start_index} - {gene.end_index}",
            f"  Start Codon:   {gene.start_codon} (at position {gene.start_index})",
            f"  Stop Codon:    {gene.stop_codon} (at position {gene.stop_index})",
            f"  Length:        {gene.length} base pairs ({gene.codon_count} codons)",
            f"  GC Content:    {gene.gc_content:.2f}%",
            f"  Sequence:      {body}",
            DOUBLE_RULE,
        ]
        return "\n".join(lines) + "\n"

    def format_gene_row(self, number: int, gene: Gene) -> Dict[str, Any]:
        """Format a single gene as a table row."""
        return {
            'Gene': f"gene_{number}",
            'Start': gene.start_index,
            'End': gene.end_index,
            'Start Codon': gene.start_codon,
            'Stop Codon': gene.stop_codon,
            'Length (bp)': gene.length,
            'Codons': gene.codon_count,
            'GC Content (%)': round(gene.gc_content, 2),
            'Protein': gene.protein,
            'Sequence': gene.sequence
        }

    def format_results(self,
                       summary: AnalysisSummary,
                       output_path: Union[str, Path],
                       format: str = 'tsv',
                       excel_compatible: bool = True) -> Path:
        """
        Write the gene table to a file.

        Args:
            summary: Analysis summary holding the genes
            output_path: Path to output file
            format: Output format ('tsv', 'csv', 'json', 'excel')
            excel_compatible: Use UTF-8 BOM for Excel compatibility

        Raises:
            ValueError: If the format is not supported
        """
        path = Path(output_path)
        rows = [self.format_gene_row(number, gene) for number, gene in enumerate(summary.genes, 1)]

        if format == 'tsv':
            self._write_delimited(rows, path, '\t', excel_compatible)
        elif format == 'csv':
            self._write_delimited(rows, path, ',', excel_compatible)
        elif format == 'json':
            self._write_json(rows, summary, path)
        elif format == 'excel':
            self._write_excel(rows, summary, path)
        else:
            raise ValueError(f"Unsupported format: {format}")

        logger.info(f"Wrote {len(rows)} genes to {path} ({format})")
        return path

    def _write_delimited(self, rows: List[Dict[str, Any]], path: Path,
                         delimiter: str, excel_compatible: bool) -> None:
        encoding = 'utf-8-sig' if excel_compatible else 'utf-8'

        with open(path, 'w', encoding=encoding, newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.COLUMNS, delimiter=delimiter)
            writer.writeheader()
            writer.writerows(rows)

    def _write_json(self, rows: List[Dict[str, Any]], summary: AnalysisSummary, path: Path) -> None:
        output = {
            'metadata': self._metadata(summary),
            'genes': rows
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(output, f, indent=2, ensure_ascii=False)

    def _write_excel(self, rows: List[Dict[str, Any]], summary: AnalysisSummary, path: Path) -> None:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Genes"

        header_font = Font(bold=True)
        header_fill = PatternFill(start_color="CCCCCC", end_color="CCCCCC", fill_type="solid")

        for col, header in enumerate(self.COLUMNS, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = header_font
            cell.fill = header_fill

        for row, result in enumerate(rows, 2):
            for col, header in enumerate(self.COLUMNS, 1):
                ws.cell(row=row, column=col, value=result.get(header, ''))

        # Auto-adjust column widths
        for column in ws.columns:
            cells = list(column)
            max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in cells)
            ws.column_dimensions[cells[0].column_letter].width = min(max_length + 2, 50)

        meta_ws = wb.create_sheet("Summary")
        for key, value in self._metadata(summary).items():
            meta_ws.append([key, json.dumps(value) if isinstance(value, dict) else value])

        wb.save(path)

    def _metadata(self, summary: AnalysisSummary) -> Dict[str, Any]:
        longest: Optional[Gene] = summary.longest_gene
        return {
            'generated': datetime.now().isoformat(),
            'origin': summary.origin,
            'sequence_length': summary.length,
            'gc_content': round(summary.gc_content, 2),
            'nucleotide_counts': summary.nucleotide_counts,
            'codon_counts': summary.codon_counts,
            'total_genes': summary.gene_count,
            'coding_percentage': round(summary.coding_percentage, 2),
            'longest_gene_start': longest.start_index if longest else None,
            'longest_gene_length': longest.length if longest else None
        }
