"""Export command writing a board as a workbook or markdown files."""

from pathlib import Path

from xlsxwriter.exceptions import FileCreateError

from ..services import ExportService
from .output import error, info, success

EXPORT_FORMATS = ("xlsx", "markdown")


def run_export(export_service: ExportService, board_id: int, dest: Path, fmt: str = "xlsx") -> int:
    """Export one board to dest; returns an exit code.

    xlsx writes a single workbook at dest. markdown writes one file per
    card under the dest directory.
    """
    if export_service.repository.get_board(board_id) is None:
        error(f"Board not found: {board_id}")
        return 1

    if fmt == "markdown":
        written = export_service.export_markdown(board_id, dest)
        if not written:
            info(f"Board {board_id} has no cards to export")
            return 0
        success(f"Exported {len(written)} cards to {dest}")
        return 0

    try:
        cards = export_service.export_xlsx(board_id, dest)
    except (OSError, FileCreateError) as e:
        error(f"Could not write {dest}: {e}")
        return 1
    success(f"Exported board {board_id} ({cards} cards) to {dest}")
    return 0
