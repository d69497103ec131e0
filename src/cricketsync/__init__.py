"""
cricketsync: Google Sheets to JSON sync for the club website.

Modules
-------
- settings:   environment-driven configuration
- sources:    the fixed set of sheet sources and their output files
- fetcher:    single-shot HTTP(S) GET of a published CSV export
- converter:  CSV parsing, cell coercion and JSON output
- sync:       sequential orchestration across all configured sources
- cli:        click entry point with plugin commands
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version(__name__)
except PackageNotFoundError:  # local editable install
    __version__ = "0.0.0-dev"

__all__ = [
    "__version__",
]
