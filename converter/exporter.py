"""
Export a schedule database as a planner course-data document.

The exporter walks the database top-down, builds the planner document and
writes it to the configured destination in a single atomic write.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import structlog

from .config import ExportSettings, get_settings
from .data.models import ScheduleDatabase
from .output.formatters import save_json
from .output.schema import PlannerDocument, create_planner_document

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a successful export."""
    path: Path
    bytes_written: int
    departments: int
    courses: int
    sections: int
    periods: int


class ScheduleExporter:
    """
    Builds and writes planner documents.

    Usage:
        exporter = ScheduleExporter(ExportSettings(output_path=Path("out.json")))
        result = exporter.export(database)
    """

    def __init__(self, settings: Optional[ExportSettings] = None):
        self.settings = settings or get_settings()

    def build_document(self, database: ScheduleDatabase) -> PlannerDocument:
        """
        Convert the database to a planner document without writing it.

        Raises:
            InvalidPeriodTime: If a period is missing a start or end time
        """
        return create_planner_document(database)

    def export(self, database: ScheduleDatabase) -> ExportResult:
        """
        Build the planner document and write it to ``settings.output_path``.

        Returns:
            ExportResult describing what was written

        Raises:
            InvalidPeriodTime: If a period is missing a start or end time
            ExportWriteFailed: If the document could not be written
        """
        path = Path(self.settings.output_path)
        log = logger.bind(path=str(path))

        document = self.build_document(database)
        counts = document.counts()
        log.debug("Built planner document", **counts)

        written = save_json(
            document,
            path,
            indent=self.settings.indent,
            create_dirs=self.settings.create_parent_dirs,
        )

        log.info("Export completed", bytes=written, **counts)
        return ExportResult(path=path, bytes_written=written, **counts)


def export_schedule(
    database: ScheduleDatabase,
    output_path: Optional[str | Path] = None,
    *,
    indent: Optional[int] = None,
    create_parent_dirs: Optional[bool] = None,
) -> ExportResult:
    """
    Export a database to a planner document.

    Args:
        database: Populated schedule database
        output_path: Destination; defaults to the configured output path
        indent: JSON indentation; defaults to the configured indent
        create_parent_dirs: Create the destination directory if missing;
            defaults to the configured behaviour

    Returns:
        ExportResult describing what was written
    """
    overrides: dict = {}
    if output_path is not None:
        overrides["output_path"] = Path(output_path)
    if indent is not None:
        overrides["indent"] = indent
    if create_parent_dirs is not None:
        overrides["create_parent_dirs"] = create_parent_dirs
    settings = ExportSettings.model_validate({**get_settings().model_dump(), **overrides})
    return ScheduleExporter(settings).export(database)
