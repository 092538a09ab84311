"""Service for exporting a board's cards."""

from __future__ import annotations

import logging
from datetime import datetime
from io import BytesIO
from pathlib import Path

import frontmatter
import xlsxwriter
from pydantic import BaseModel

from ..utils import ordered_dirname, ordered_filename, slugify
from .base import BaseService

logger = logging.getLogger(__name__)

# Workbook columns: each level is indented one column further
XLSX_SWIMLANE_COL = 0
XLSX_LIST_COL = 1
XLSX_CARD_COL = 2

IMAGE_SIGNATURES: list[tuple[bytes, str]] = [
    (b"\x89PNG\r\n\x1a\n", "png"),
    (b"\xff\xd8\xff", "jpeg"),
    (b"GIF87a", "gif"),
    (b"GIF89a", "gif"),
]


def image_extension(data: bytes) -> str | None:
    """Return the image type of an attachment, or None if it is not an image."""
    for signature, extension in IMAGE_SIGNATURES:
        if data.startswith(signature):
            return extension
    return None


class ExportRow(BaseModel):
    """One exported card with its location on the board."""

    board: str
    board_description: str = ""
    swimlane: str
    list: str
    title: str
    description: str = ""
    created_at: datetime | None = None
    swimlane_position: int
    list_position: int
    position: int
    attachment: bytes | None = None


class ExportService(BaseService):
    """Read-only export of board contents. Never writes positions."""

    def export_rows(self, board_id: int) -> list[ExportRow]:
        """Flatten a board into rows in display order."""
        board = self.repository.get_board(board_id)
        if board is None:
            logger.debug("export_rows: board not found: %d", board_id)
            return []

        rows: list[ExportRow] = []
        for swimlane in self.repository.get_swimlanes(board_id):
            for board_list in self.repository.get_lists(swimlane.id):
                for card in self.repository.get_cards(board_list.id):
                    rows.append(
                        ExportRow(
                            board=board.name,
                            board_description=board.description,
                            swimlane=swimlane.name,
                            list=board_list.name,
                            title=card.title,
                            description=card.description,
                            created_at=card.created_at,
                            swimlane_position=swimlane.position,
                            list_position=board_list.position,
                            position=card.position,
                            attachment=card.attachment,
                        )
                    )
        return rows

    def export_markdown(self, board_id: int, dest: Path) -> list[Path]:
        """
        Write one markdown file per card, with YAML front matter.

        Layout: dest/<board>/<NN-swimlane>/<NN-list>/<NNN-card>.md. Card
        attachments are written next to the card as <NNN-card>.bin.

        Returns:
            Paths of the markdown files written.
        """
        board = self.repository.get_board(board_id)
        if board is None:
            logger.debug("export_markdown: board not found: %d", board_id)
            return []

        board_dir = dest / (slugify(board.name) or f"board-{board_id}")
        written: list[Path] = []
        for row in self.export_rows(board_id):
            card_dir = (
                board_dir
                / ordered_dirname(row.swimlane_position, row.swimlane)
                / ordered_dirname(row.list_position, row.list)
            )
            card_dir.mkdir(parents=True, exist_ok=True)
            filepath = card_dir / ordered_filename(row.position, row.title)

            post = frontmatter.Post(row.description)
            post.metadata = self._front_matter(row)
            if row.attachment:
                attachment_path = filepath.with_suffix(".bin")
                attachment_path.write_bytes(row.attachment)
                post.metadata["attachment"] = attachment_path.name

            # sort_keys=False keeps board > swimlane > list > card order
            with filepath.open("w") as f:
                f.write(frontmatter.dumps(post, sort_keys=False))
            written.append(filepath)

        logger.info("Exported board %d: %d cards to %s", board_id, len(written), board_dir)
        return written

    def export_xlsx(self, board_id: int, dest: Path) -> int | None:
        """
        Write the board to a single-sheet workbook.

        The board name and description head the sheet. Each swimlane, list
        and card gets its own row, indented one column per level. Card
        descriptions sit beside the title and image attachments are
        embedded next to them.

        Returns:
            Number of cards written, or None if the board does not exist.
        """
        board = self.repository.get_board(board_id)
        if board is None:
            logger.debug("export_xlsx: board not found: %d", board_id)
            return None

        dest.parent.mkdir(parents=True, exist_ok=True)
        with xlsxwriter.Workbook(str(dest)) as workbook:
            cards = self._write_sheet(workbook, board)
        logger.info("Exported board %d: %d cards to %s", board_id, cards, dest)
        return cards

    def _write_sheet(self, workbook, board) -> int:
        label_format = workbook.add_format({"bold": True})
        sheet = workbook.add_worksheet("Board")
        sheet.set_column(XLSX_CARD_COL, XLSX_CARD_COL + 3, 24)

        sheet.write(0, 0, "Board:", label_format)
        sheet.write_string(0, 1, board.name)
        sheet.write(1, 0, "Description:", label_format)
        sheet.write_string(1, 1, board.description)

        row = 2
        cards = 0
        for swimlane in self.repository.get_swimlanes(board.id):
            sheet.write(row, XLSX_SWIMLANE_COL, "Swimlane:", label_format)
            sheet.write_string(row, XLSX_SWIMLANE_COL + 1, swimlane.name)
            row += 1
            for board_list in self.repository.get_lists(swimlane.id):
                sheet.write(row, XLSX_LIST_COL, "List:", label_format)
                sheet.write_string(row, XLSX_LIST_COL + 1, board_list.name)
                row += 1
                for card in self.repository.get_cards(board_list.id):
                    sheet.write(row, XLSX_CARD_COL, "Card:", label_format)
                    sheet.write_string(row, XLSX_CARD_COL + 1, card.title)
                    if card.description:
                        sheet.write(row, XLSX_CARD_COL + 2, "Description:", label_format)
                        sheet.write_string(row, XLSX_CARD_COL + 3, card.description)
                    if card.attachment:
                        self._write_attachment(sheet, row, card.id, card.attachment)
                    row += 1
                    cards += 1

        return cards

    @staticmethod
    def _write_attachment(sheet, row: int, card_id: int, data: bytes) -> None:
        col = XLSX_CARD_COL + 4
        extension = image_extension(data)
        if extension is None:
            # Only images can be embedded
            sheet.write(row, col, f"[attachment: {len(data)} bytes]")
            return
        sheet.insert_image(
            row,
            col,
            f"card-{card_id}.{extension}",
            {"image_data": BytesIO(data), "object_position": 1},
        )

    @staticmethod
    def _front_matter(row: ExportRow) -> dict:
        data: dict = {
            "title": row.title,
            "board": row.board,
            "swimlane": row.swimlane,
            "list": row.list,
            "position": row.position,
        }
        if row.created_at:
            data["created"] = row.created_at.isoformat()
        return data
