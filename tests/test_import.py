"""Test basic imports and setup."""

def test_import():
    """Test that the package can be imported."""
    import gene_finder
    assert gene_finder.__version__ == "1.0.0"


def test_dependencies():
    """Test that core dependencies are available."""
    import click
    import openpyxl
    import Bio

    # Basic smoke test
    assert click.command
    assert openpyxl.__version__
    assert Bio.__version__
