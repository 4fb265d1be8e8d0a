"""Helpers that keep ``position`` columns contiguous within a scope."""

from collections.abc import Sequence
from typing import Protocol, TypeVar

from grocery_list.exceptions import ValidationError


class Positioned(Protocol):
    id: int
    position: int


T = TypeVar("T", bound=Positioned)


def renumber(rows: Sequence[T]) -> list[T]:
    """Assign positions 0..n-1 in sequence order."""
    for index, row in enumerate(rows):
        if row.position != index:
            row.position = index
    return list(rows)


def place(rows: Sequence[T], row: T, index: int | None = None) -> list[T]:
    """Put ``row`` at ``index`` (end when None, clamped otherwise) and renumber."""
    ordered = [r for r in rows if r is not row]
    if index is None or index > len(ordered):
        index = len(ordered)
    ordered.insert(max(index, 0), row)
    return renumber(ordered)


def apply_order(rows: Sequence[T], ordered_ids: Sequence[int], kind: str) -> list[T]:
    """Reorder ``rows`` so ``ordered_ids`` come first, in that order.

    Rows not named keep their previous relative order after the named ones.
    Nothing is modified when the id list is invalid.

    Raises:
        ValidationError: on duplicate ids or ids not present in ``rows``.
    """
    by_id = {row.id: row for row in rows}

    seen: set[int] = set()
    duplicates: list[int] = []
    for item_id in ordered_ids:
        if item_id in seen:
            duplicates.append(item_id)
        seen.add(item_id)
    if duplicates:
        raise ValidationError(f"Duplicate {kind} ids in reorder request: {duplicates}")

    unknown = [i for i in ordered_ids if i not in by_id]
    if unknown:
        raise ValidationError(f"Unknown {kind} ids in reorder request: {unknown}")

    named = [by_id[i] for i in ordered_ids]
    rest = [row for row in rows if row.id not in seen]
    return renumber(named + rest)
