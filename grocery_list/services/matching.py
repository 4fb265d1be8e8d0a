"""Name cleanup and autocomplete matching shared by the services."""

from collections.abc import Iterable

from grocery_list.exceptions import ValidationError

SUGGESTION_LIMIT = 10


def clean_name(name: str, kind: str) -> str:
    """Trim a user-supplied name, rejecting blank ones."""
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError(f"{kind} name must not be empty")
    return cleaned


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally (use with escape="\\")."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def rank_matches(names: Iterable[str], query: str, limit: int = SUGGESTION_LIMIT) -> list[str]:
    """Case-insensitive matches for ``query``: prefix matches first, then substrings.

    Input order is kept within each group and duplicate spellings are dropped.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    seen: set[str] = set()
    prefix_matches: list[str] = []
    other_matches: list[str] = []
    for name in names:
        key = name.lower()
        if key in seen or needle not in key:
            continue
        seen.add(key)
        if key.startswith(needle):
            prefix_matches.append(name)
        else:
            other_matches.append(name)

    return (prefix_matches + other_matches)[:limit]
