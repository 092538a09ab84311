"""Print a board as a tree."""

from rich.console import Console
from rich.tree import Tree

from ..models import BoardTree
from ..services import BoardService
from .output import error


def build_tree(board: BoardTree) -> Tree:
    """Render a board as a rich Tree, one branch per level."""
    root = Tree(f"[bold]{board.board.name}[/] [dim]#{board.board.id}[/]")
    for sn in board.swimlanes:
        lane = root.add(f"[blue]{sn.swimlane.name}[/] [dim]@{sn.swimlane.position}[/]")
        for ln in sn.lists:
            column = lane.add(f"[green]{ln.board_list.name}[/] [dim]@{ln.board_list.position}[/]")
            for card in ln.cards:
                clip = " [yellow]+attachment[/]" if card.has_attachment else ""
                column.add(f"{card.title} [dim]@{card.position}[/]{clip}")
    return root


def run_show(board_service: BoardService, board_id: int, console: Console | None = None) -> int:
    """Print one board; returns an exit code."""
    board = board_service.load_board(board_id)
    if board is None:
        error(f"Board not found: {board_id}")
        return 1
    (console or Console()).print(build_tree(board))
    return 0
