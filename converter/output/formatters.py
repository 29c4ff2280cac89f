"""
Output formatters for planner documents.

This module provides:
- JSON: the planner document itself, compact or indented
- Console: rich summary tables for the CLI
- save_json: atomic write of the document to its destination
"""

from __future__ import annotations

import os
import stat
import tempfile
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import structlog
from rich.console import Console
from rich.table import Table

from converter.data.models import format_term_name
from converter.exceptions import ExportWriteFailed

if TYPE_CHECKING:
    from .schema import PlannerDocument

logger = structlog.get_logger(__name__)


# =============================================================================
# JSON Formatter
# =============================================================================

class JSONFormatter:
    """Formats planner documents as JSON."""

    def __init__(self, indent: Optional[int] = None):
        """
        Initialize JSON formatter.

        Args:
            indent: JSON indentation level; None for compact output
        """
        self.indent = indent

    def format(self, document: PlannerDocument) -> str:
        """
        Format document as JSON string.

        Args:
            document: PlannerDocument to format

        Returns:
            JSON string
        """
        return document.to_json(indent=self.indent)


def format_json(document: PlannerDocument, indent: Optional[int] = None) -> str:
    """Convenience function for JSON formatting."""
    return JSONFormatter(indent=indent).format(document)


# =============================================================================
# Console Formatter
# =============================================================================

class ConsoleFormatter:
    """Renders planner documents as rich tables."""

    def __init__(self, width: int = 100):
        self.width = width

    def department_table(self, document: PlannerDocument) -> Table:
        """One row per department with course, section and period counts."""
        table = Table(title="Departments", show_header=True, header_style="bold cyan")
        table.add_column("Dept", style="cyan")
        table.add_column("Name")
        table.add_column("Courses", justify="right")
        table.add_column("Sections", justify="right")
        table.add_column("Periods", justify="right")

        for dept in document.departments:
            sections = [s for c in dept.courses for s in c.sections]
            table.add_row(
                dept.abbreviation,
                dept.name,
                str(len(dept.courses)),
                str(len(sections)),
                str(sum(len(s.periods) for s in sections)),
            )

        return table

    def term_table(self, document: PlannerDocument) -> Table:
        """Sections per computed term letter."""
        terms = Counter(
            s.computed_term
            for d in document.departments
            for c in d.courses
            for s in c.sections
        )

        table = Table(title="Sections by Term", show_header=True, header_style="bold cyan")
        table.add_column("Term", style="cyan")
        table.add_column("Sections", justify="right")
        for letter in sorted(terms):
            table.add_row(format_term_name(letter), str(terms[letter]))

        return table

    def format(self, document: PlannerDocument) -> str:
        """Format both tables as plain text."""
        console = Console(record=True, width=self.width)
        console.print(self.department_table(document))
        console.print(self.term_table(document))
        return console.export_text()


def format_console(document: PlannerDocument) -> str:
    """Format document summary for the console."""
    return ConsoleFormatter().format(document)


# =============================================================================
# File Writing Utilities
# =============================================================================

def _file_mode(filepath: Path) -> int:
    """Mode for the written file: the existing file's mode, else 0666 less the umask."""
    try:
        return stat.S_IMODE(filepath.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text_atomic(filepath: str | Path, content: str, create_dirs: bool = False) -> int:
    """
    Write text to a file so readers only ever see the old or the new content.

    The content goes to a temporary file beside the destination which is
    flushed, synced and then renamed over the destination. The file keeps
    the mode of the file it replaces; a new file gets the umask default.

    Args:
        filepath: Destination path
        content: Text to write (encoded as UTF-8)
        create_dirs: Create missing parent directories

    Returns:
        Number of bytes written

    Raises:
        ExportWriteFailed: If any step fails; no partial file is left behind
    """
    filepath = Path(filepath)
    data = content.encode("utf-8")

    tmp_name: Optional[str] = None
    try:
        if create_dirs:
            filepath.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{filepath.name}.",
            suffix=".tmp",
            dir=filepath.parent,
        )
        with os.fdopen(fd, "wb") as f:
            os.fchmod(f.fileno(), _file_mode(filepath))
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, filepath)
        tmp_name = None
    except OSError as e:
        logger.error("Failed to write document", path=str(filepath), error=str(e))
        raise ExportWriteFailed(filepath, e.strerror or str(e)) from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass

    return len(data)


def save_json(
    document: PlannerDocument,
    filepath: str | Path,
    indent: Optional[int] = None,
    create_dirs: bool = False,
) -> int:
    """
    Save document as a JSON file.

    Args:
        document: PlannerDocument to save
        filepath: Path to save to
        indent: JSON indentation
        create_dirs: Create missing parent directories

    Returns:
        Number of bytes written
    """
    json_str = JSONFormatter(indent=indent).format(document)
    return write_text_atomic(filepath, json_str, create_dirs=create_dirs)
