"""Tests for the command-line interface."""

import json
import logging
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from gene_finder.cli import main
from gene_finder.output_formatter import OutputFormatter


class TestCLI:
    """Test cases for the gene finder CLI."""

    @pytest.fixture
    def runner(self):
        """Create a Click test runner."""
        return CliRunner()

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        """Drop handlers bound to the runner's streams."""
        yield
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    @pytest.fixture
    def fasta_file(self, temp_dir):
        """Create a small FASTA input file."""
        path = temp_dir / "input.fasta"
        path.write_text(">test sequence\nATGATG\nAAATAG\n")
        return path

    def test_analyze_sequence_option(self, runner):
        """Test analyzing a sequence given on the command line."""
        result = runner.invoke(main, ['--sequence', 'ATGAAATAG'])

        assert result.exit_code == 0
        assert "DNA SEQUENCE ANALYSIS REPORT" in result.output
        assert "Total Genes Found: 1" in result.output
        assert "Gene[0-8] ATG...TAG" in result.output

    def test_analyze_file(self, runner, fasta_file):
        """Test analyzing a FASTA file."""
        result = runner.invoke(main, [str(fasta_file)])

        assert result.exit_code == 0
        assert f"File: {fasta_file}" in result.output
        assert "Total Length:     12 base pairs" in result.output
        assert "Total Genes Found: 2" in result.output

    def test_details_option(self, runner, fasta_file):
        """Test detailed gene listing."""
        result = runner.invoke(main, [str(fasta_file), '--details'])

        assert result.exit_code == 0
        assert "Gene Position: 0 - 11" in result.output
        assert "Gene Position: 3 - 11" in result.output

    def test_max_genes_option(self, runner, fasta_file):
        """Test limiting the gene listing."""
        result = runner.invoke(main, [str(fasta_file), '--max-genes', '1'])

        assert result.exit_code == 0
        assert "... and 1 more" in result.output

    def test_invalid_sequence(self, runner):
        """Test that invalid input fails with the offending character."""
        result = runner.invoke(main, ['--sequence', 'ATGXAA'])

        assert result.exit_code == 1
        assert "ERROR: Invalid nucleotide 'X' at position 3" in result.output

    def test_empty_sequence(self, runner):
        """Test that an all-noise sequence is rejected."""
        result = runner.invoke(main, ['--sequence', '123 - 456'])

        assert result.exit_code == 1
        assert "cannot be empty" in result.output

    def test_missing_file(self, runner, temp_dir):
        """Test that a missing input file fails cleanly."""
        result = runner.invoke(main, [str(temp_dir / "missing.fasta")])

        assert result.exit_code == 1
        assert "ERROR: File not found" in result.output

    def test_input_and_sequence_conflict(self, runner, fasta_file):
        """Test that only one input source is accepted."""
        result = runner.invoke(main, [str(fasta_file), '--sequence', 'ATG'])

        assert result.exit_code == 1
        assert "not both" in result.output

    def test_no_input_shows_help(self, runner):
        """Test that running without input prints usage."""
        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_reverse_complement(self, runner):
        """Test printing the reverse complement."""
        result = runner.invoke(main, ['--sequence', 'AACG', '--reverse-complement'])

        assert result.exit_code == 0
        assert "REVERSE COMPLEMENT:" in result.output
        assert "  CGTT" in result.output

    def test_write_gene_table(self, runner, fasta_file, temp_dir):
        """Test writing the gene table."""
        output_file = temp_dir / "genes.json"

        result = runner.invoke(main, [
            str(fasta_file),
            '--output', str(output_file),
            '--output-format', 'json'
        ])

        assert result.exit_code == 0
        assert "Gene table written to" in result.output

        with open(output_file) as f:
            data = json.load(f)
        assert data['metadata']['total_genes'] == 2

    def test_write_gene_table_failure(self, runner, fasta_file, temp_dir):
        """Test that write failures exit with an error."""
        output_file = temp_dir / "missing_dir" / "genes.tsv"

        result = runner.invoke(main, [str(fasta_file), '--output', str(output_file)])

        assert result.exit_code == 1
        assert "ERROR:" in result.output

    def test_save_fasta(self, runner, temp_dir):
        """Test saving the cleaned sequence."""
        fasta_path = temp_dir / "clean.fasta"

        result = runner.invoke(main, [
            '--sequence', 'atg aaa tag',
            '--save-fasta', str(fasta_path),
            '--fasta-header', 'cleaned'
        ])

        assert result.exit_code == 0
        assert fasta_path.read_text().splitlines() == [">cleaned", "ATGAAATAG"]

    def test_error_report(self, runner, temp_dir):
        """Test exporting an error report after a failure."""
        report_path = temp_dir / "errors.json"

        result = runner.invoke(main, [
            '--sequence', 'ATGZ',
            '--error-report', str(report_path)
        ])

        assert result.exit_code == 1
        with open(report_path) as f:
            report = json.load(f)
        assert report['summary']['by_type'] == {'invalid_sequence': 1}

    def test_config_file(self, runner, fasta_file, temp_dir):
        """Test that settings are read from a configuration file."""
        config_file = temp_dir / "config.json"
        config_file.write_text(json.dumps({'report': {'show_gene_details': True}}))

        result = runner.invoke(main, [str(fasta_file), '--config', str(config_file)])

        assert result.exit_code == 0
        assert "Gene Position: 0 - 11" in result.output

    def test_invalid_config_file(self, runner, fasta_file, temp_dir):
        """Test that a broken configuration file is reported."""
        config_file = temp_dir / "config.json"
        config_file.write_text("{broken")

        result = runner.invoke(main, [str(fasta_file), '--config', str(config_file)])

        assert result.exit_code == 1
        assert "Invalid configuration file" in result.output

    def test_invalid_config_value(self, runner, temp_dir):
        """Test that a bad setting value is reported instead of crashing."""
        config_file = temp_dir / "config.json"
        config_file.write_text(json.dumps({'logging': {'level': 'VERBOSE'}}))

        result = runner.invoke(main, ['--sequence', 'ATGAAATAG', '--config', str(config_file)])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "ERROR: Invalid configuration file" in result.output
        assert "logging.level" in result.output
        assert "Suggestion: Fix the configuration file" in result.output

    def test_invalid_config_error_report(self, runner, temp_dir):
        """Test that configuration errors are written to the error report."""
        config_file = temp_dir / "config.json"
        config_file.write_text("{not json")
        report_path = temp_dir / "errors.json"

        result = runner.invoke(main, [
            '--sequence', 'ATGAAATAG',
            '--config', str(config_file),
            '--error-report', str(report_path)
        ])

        assert result.exit_code == 1
        with open(report_path) as f:
            report = json.load(f)
        assert report['summary']['by_type'] == {'config_error': 1}
        error = report['detailed_errors'][0]
        assert error['operation'] == "load_config"
        assert error['item_id'] == str(config_file)

    def test_unexpected_write_failure(self, runner, temp_dir, monkeypatch):
        """Test that unexpected writer failures are reported as critical."""
        def broken_writer(*args, **kwargs):
            raise RuntimeError("workbook broken")

        monkeypatch.setattr(OutputFormatter, 'format_results', broken_writer)
        report_path = temp_dir / "errors.json"

        result = runner.invoke(main, [
            '--sequence', 'ATGAAATAG',
            '--output', str(temp_dir / "genes.xlsx"),
            '--error-report', str(report_path)
        ])

        assert result.exit_code == 1
        assert "ERROR: workbook broken" in result.output
        with open(report_path) as f:
            report = json.load(f)
        assert report['summary']['by_severity'] == {'critical': 1}

    def test_log_dir(self, runner, temp_dir):
        """Test that a log file is created when a log directory is given."""
        log_dir = temp_dir / "logs"

        result = runner.invoke(main, ['--sequence', 'ATGAAATAG', '--log-dir', str(log_dir)])

        assert result.exit_code == 0
        assert any(log_dir.glob("gene_finder_*.log"))


class TestCLIQuietMode:
    """Test cases for CLI quiet mode."""

    @pytest.fixture
    def runner(self):
        """Create a Click test runner."""
        return CliRunner()

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        """Drop handlers bound to the runner's streams."""
        yield
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    def test_quiet_mode_suppresses_output(self, runner, temp_dir):
        """Test that quiet mode suppresses normal output."""
        output_file = temp_dir / "genes.tsv"

        result = runner.invoke(main, [
            '--sequence', 'ATGAAATAG',
            '--output', str(output_file),
            '--quiet'
        ])

        assert result.exit_code == 0
        assert result.output == ""
        assert output_file.exists()

    def test_quiet_mode_shows_errors(self, runner):
        """Test that quiet mode still shows errors."""
        result = runner.invoke(main, ['nonexistent.fasta', '--quiet'])

        assert result.exit_code != 0
        assert "ERROR" in result.output

    def test_quiet_and_verbose_conflict(self, runner):
        """Test that quiet and verbose flags conflict."""
        result = runner.invoke(main, ['--sequence', 'ATG', '--quiet', '--verbose'])

        assert result.exit_code == 1
        assert "Cannot use both --quiet and --verbose" in result.output

    def test_generate_config_quiet(self, runner, temp_dir, monkeypatch):
        """Test config generation in quiet mode."""
        monkeypatch.chdir(temp_dir)

        result = runner.invoke(main, ['--generate-config', '--quiet'])

        assert result.exit_code == 0
        assert (temp_dir / 'gene_finder.config.example.json').exists()
        assert result.output.strip() == ""

    def test_normal_mode_output(self, runner):
        """Test that normal mode prints the report."""
        result = runner.invoke(main, ['--sequence', 'ATGAAATAG'])

        assert result.exit_code == 0
        assert "Sequence: ATGAAATAG" in result.output
        assert "GENE ANALYSIS:" in result.output
