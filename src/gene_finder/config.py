"""Configuration management for the gene finder."""

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

from .output_formatter import OutputFormatter

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ReportConfig:
    """Report content settings."""
    show_gene_details: bool = False
    max_genes_listed: int = 10
    preview_length: int = 30


@dataclass
class OutputConfig:
    """Output file settings."""
    format: str = "tsv"
    excel_compatible: bool = True
    fasta_header: str = "sequence"


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    directory: Optional[str] = None  # No log file unless set
    colors: bool = True


@dataclass
class Config:
    """Main configuration container."""
    report: ReportConfig
    output: OutputConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            report=ReportConfig(),
            output=OutputConfig(),
            logging=LoggingConfig()
        )

    @classmethod
    def from_file(cls, path: Path) -> 'Config':
        """Load configuration from JSON file.

        Raises:
            ValueError: If the file is not valid configuration JSON
        """
        if not path.exists():
            return cls.default()

        try:
            with open(path, 'r') as f:
                data = json.load(f)

            config = cls(
                report=ReportConfig(**data.get('report', {})),
                output=OutputConfig(**data.get('output', {})),
                logging=LoggingConfig(**data.get('logging', {}))
            )
            config.validate()
            return config
        except (ValueError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid configuration file {path}: {e}") from e

    def validate(self) -> None:
        """Check setting types and values.

        Raises:
            ValueError: Naming the first bad setting
        """
        _check_bool("report.show_gene_details", self.report.show_gene_details)
        for name in ('max_genes_listed', 'preview_length'):
            value = getattr(self.report, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"report.{name} must be a non-negative integer, got {value!r}")

        if self.output.format not in OutputFormatter.FORMATS:
            raise ValueError(
                f"output.format must be one of {', '.join(OutputFormatter.FORMATS)}, "
                f"got {self.output.format!r}"
            )
        _check_bool("output.excel_compatible", self.output.excel_compatible)
        if not isinstance(self.output.fasta_header, str) or not self.output.fasta_header:
            raise ValueError(f"output.fasta_header must be a non-empty string, got {self.output.fasta_header!r}")

        if not isinstance(self.logging.level, str) or self.logging.level.upper() not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {self.logging.level!r}")
        if self.logging.directory is not None and not isinstance(self.logging.directory, str):
            raise ValueError(f"logging.directory must be a path string, got {self.logging.directory!r}")
        _check_bool("logging.colors", self.logging.colors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'report': asdict(self.report),
            'output': asdict(self.output),
            'logging': asdict(self.logging)
        }

    def to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def merge_cli_args(self, **kwargs) -> None:
        """Merge CLI arguments into configuration."""
        # Report settings
        if kwargs.get('details') is not None:
            self.report.show_gene_details = kwargs['details']
        if kwargs.get('max_genes') is not None:
            self.report.max_genes_listed = kwargs['max_genes']

        # Output settings
        if kwargs.get('output_format'):
            self.output.format = kwargs['output_format']
        if kwargs.get('fasta_header'):
            self.output.fasta_header = kwargs['fasta_header']

        # Logging settings
        if kwargs.get('log_level'):
            self.logging.level = kwargs['log_level']
        if kwargs.get('log_dir'):
            self.logging.directory = kwargs['log_dir']


def _check_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    locations = [
        Path.home() / '.gene_finder' / 'config.json',
        Path.home() / '.config' / 'gene_finder' / 'config.json',
        Path('.gene_finder.json'),
        Path('gene_finder.config.json')
    ]

    # Return first existing file
    for path in locations:
        if path.exists():
            return path

    return Path.home() / '.gene_finder' / 'config.json'


def create_example_config(path: Optional[Path] = None) -> Path:
    """Create an example configuration file."""
    if path is None:
        path = Path('gene_finder.config.example.json')

    config = Config.default()

    config.report.show_gene_details = True
    config.report.max_genes_listed = 25
    config.output.format = "csv"
    config.output.fasta_header = "my_sequence"
    config.logging.directory = ".gene_finder_logs"

    config.to_file(path)
    return path
