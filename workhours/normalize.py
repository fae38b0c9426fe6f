"""Title normalization.

Events are grouped by a case-folded, whitespace-trimmed form of their title.
Titles that are missing or blank share the ``"(untitled)"`` key.
"""

UNTITLED = "(untitled)"


def normalize_title(raw: str | None) -> str:
    """Return the grouping key for a raw event title.

    Example:
        >>> normalize_title("  Team Sync\\n")
        'team sync'
        >>> normalize_title(None)
        '(untitled)'
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return UNTITLED
    return trimmed.lower()


def display_title(raw: str | None, key: str) -> str:
    """Pick the human-presentable title for a group.

    Uses the trimmed raw title when it is non-empty, otherwise derives one
    from the group key.
    """
    trimmed = (raw or "").strip()
    if trimmed:
        return trimmed
    if key == UNTITLED:
        return UNTITLED
    return key.title()
