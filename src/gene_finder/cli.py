"""Command-line interface for the DNA gene finder."""

import sys
from pathlib import Path
from typing import Optional

import click

from .analyzer import DNAAnalyzer
from .cli_utils import echo, echo_error, set_quiet_mode
from .config import Config, LOG_LEVELS, get_default_config_path, create_example_config
from .error_handler import ErrorHandler
from .logging_config import setup_logging, get_logger
from .output_formatter import OutputFormatter
from .sequence import DNASequence, InvalidSequenceError

logger = get_logger('cli')


def _fail(error_handler: ErrorHandler, error: Exception, operation: str,
          item_id: Optional[str] = None, error_report: Optional[str] = None) -> None:
    """Record an error, tell the user and exit with status 1."""
    context = error_handler.handle_error(error, operation=operation, item_id=item_id)

    echo_error(context.message, context.suggestion)

    if error_report:
        _export_error_report(error_handler, error_report)

    sys.exit(1)


def _export_error_report(error_handler: ErrorHandler, error_report: str) -> None:
    try:
        error_handler.export_error_report(error_report)
        echo(f"Error report exported to: {error_report}")
    except OSError as e:
        echo_error(f"Failed to write error report: {e}")


@click.command()
@click.argument('input_file', type=click.Path(), required=False)
@click.option('--sequence', '-s', help='Analyze a sequence given on the command line')
@click.option('--output', '-o', type=click.Path(), help='Write the gene table to this file')
@click.option('--output-format', type=click.Choice(OutputFormatter.FORMATS), help='Gene table format')
@click.option('--details/--no-details', default=None, help='Show a detailed block for each listed gene')
@click.option('--max-genes', type=click.IntRange(min=0), help='Maximum number of genes listed in the report')
@click.option('--reverse-complement', is_flag=True, help='Print the reverse complement of the sequence')
@click.option('--save-fasta', type=click.Path(), help='Save the cleaned sequence as FASTA')
@click.option('--fasta-header', help='Header line for --save-fasta')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress all output except errors')
@click.option('--log-dir', help='Directory for log files')
@click.option('--log-level', type=click.Choice(LOG_LEVELS), help='Logging level')
@click.option('--config', type=click.Path(exists=True), help='Configuration file path')
@click.option('--generate-config', is_flag=True, help='Generate example configuration file')
@click.option('--error-report', type=click.Path(), help='Export error report to file')
def main(input_file, sequence, output, output_format, details, max_genes, reverse_complement,
         save_fasta, fasta_header, verbose, quiet, log_dir, log_level, config, generate_config,
         error_report):
    """DNA Gene Finder.

    Find open reading frames in a DNA sequence and report its composition.

    Examples:
        gene-finder sequence.fasta
        gene-finder sequence.fasta --output genes.tsv --details
        gene-finder --sequence ATGAAATAG
    """
    if quiet and verbose:
        echo_error("Cannot use both --quiet and --verbose")
        sys.exit(1)

    set_quiet_mode(quiet)

    if generate_config:
        config_path = create_example_config()
        echo(f"Generated example configuration file: {config_path}")
        sys.exit(0)

    error_handler = ErrorHandler()

    # Load configuration
    config_path = Path(config) if config else get_default_config_path()
    try:
        cfg = Config.from_file(config_path)
    except ValueError as e:
        # Logging settings come from the broken file, so fall back to the CLI ones
        setup_logging(log_level='DEBUG' if verbose else log_level or 'INFO', log_dir=log_dir, quiet=quiet)
        _fail(error_handler, e, "load_config", item_id=str(config_path), error_report=error_report)

    cfg.merge_cli_args(
        output_format=output_format,
        details=details,
        max_genes=max_genes,
        fasta_header=fasta_header,
        log_level='DEBUG' if verbose else log_level,
        log_dir=log_dir
    )

    setup_logging(
        log_level=cfg.logging.level,
        log_dir=cfg.logging.directory,
        colors=cfg.logging.colors,
        quiet=quiet
    )

    if input_file and sequence:
        echo_error("Provide either INPUT_FILE or --sequence, not both")
        sys.exit(1)

    if not input_file and not sequence:
        ctx = click.get_current_context()
        echo(ctx.get_help())
        return

    # Load and validate the sequence
    try:
        if input_file:
            dna = DNASequence.from_file(input_file)
        else:
            dna = DNASequence.from_string(sequence)
    except (InvalidSequenceError, OSError) as e:
        _fail(error_handler, e, "load_sequence", item_id=input_file or "--sequence",
              error_report=error_report)

    logger.debug(f"Analyzing {dna.length:,} bp from {dna.origin}")

    analyzer = DNAAnalyzer(dna)
    summary = analyzer.summarize()
    formatter = OutputFormatter()

    echo(f"Sequence: {dna.preview(cfg.report.preview_length)}")
    echo(formatter.format_report(
        summary,
        max_genes=cfg.report.max_genes_listed,
        show_details=cfg.report.show_gene_details
    ), nl=False)

    if reverse_complement:
        complement = DNASequence(analyzer.get_reverse_complement(), "Reverse complement")
        echo("REVERSE COMPLEMENT:")
        echo(f"  {complement}")
        echo()

    if save_fasta:
        try:
            dna.save_to_file(save_fasta, cfg.output.fasta_header)
            echo(f"Sequence saved to: {save_fasta}")
        except OSError as e:
            _fail(error_handler, e, "save_fasta", item_id=save_fasta, error_report=error_report)

    if output:
        try:
            formatter.format_results(
                summary,
                output,
                format=cfg.output.format,
                excel_compatible=cfg.output.excel_compatible
            )
            echo(f"Gene table written to: {output}")
        except Exception as e:
            # Writers may fail in openpyxl as well as on disk
            _fail(error_handler, e, "write_output", item_id=output, error_report=error_report)

    if error_report:
        _export_error_report(error_handler, error_report)


if __name__ == '__main__':
    main()
