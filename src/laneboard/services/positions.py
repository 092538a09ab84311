"""Position arithmetic for sibling sets.

Pure functions only: callers read a sibling set from the repository,
compute the new assignment here, and write back the changed rows.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models import SiblingRef


def compact(siblings: Sequence[SiblingRef]) -> list[SiblingRef]:
    """Renumber siblings to 0..n-1, keeping the given order."""
    return [SiblingRef(id=s.id, position=idx) for idx, s in enumerate(siblings)]


def append_position(max_position: int | None) -> int:
    """Position for a new last sibling given the current maximum.

    An empty sibling set (None) counts as -1, so the first child gets 0.
    """
    return (-1 if max_position is None else max_position) + 1


def append_at_end(siblings: Sequence[SiblingRef], new_id: int) -> list[SiblingRef]:
    """Return siblings with new_id added one past the current maximum."""
    max_position = max((s.position for s in siblings), default=None)
    return [*siblings, SiblingRef(id=new_id, position=append_position(max_position))]


def swap(a: SiblingRef, b: SiblingRef) -> tuple[SiblingRef, SiblingRef]:
    """Exchange the positions of two siblings."""
    return SiblingRef(id=a.id, position=b.position), SiblingRef(id=b.id, position=a.position)


def clamp_index(index: int, length: int) -> int:
    """Clamp an insertion index into [0, length]."""
    return max(0, min(index, length))


def insert_at(siblings: Sequence[SiblingRef], moved_id: int, target_index: int) -> list[SiblingRef]:
    """Move one sibling to target_index and renumber the whole set.

    target_index indexes the sequence with the moved item removed and is
    clamped into range. If moved_id is not among the siblings it is
    inserted as a new member.
    """
    remaining = [s for s in siblings if s.id != moved_id]
    index = clamp_index(target_index, len(remaining))
    moved = SiblingRef(id=moved_id, position=-1)
    return compact([*remaining[:index], moved, *remaining[index:]])


def remove(siblings: Sequence[SiblingRef], removed_id: int) -> list[SiblingRef]:
    """Drop one sibling and close the gap it leaves."""
    return compact([s for s in siblings if s.id != removed_id])


def changed_positions(
    before: Iterable[SiblingRef], after: Iterable[SiblingRef]
) -> dict[int, int]:
    """Map id -> new position for every sibling whose position changed."""
    old = {s.id: s.position for s in before}
    return {s.id: s.position for s in after if old.get(s.id) != s.position}


def is_dense(positions: Iterable[int]) -> bool:
    """Check positions are exactly 0..n-1 with no gaps or duplicates."""
    ordered = sorted(positions)
    return ordered == list(range(len(ordered)))


def neighbor_position(position: int, delta: int, max_position: int | None) -> int | None:
    """Position of the adjacent sibling, or None at a boundary."""
    if max_position is None:
        return None
    target = position + delta
    if target < 0 or target > max_position:
        return None
    return target
