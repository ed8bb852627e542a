"""Character-aware text truncation helpers."""

ELLIPSIS = "…"


def truncate_chars(s: str, max_chars: int) -> str:
    """Keep at most ``max_chars`` characters, without an ellipsis."""
    return s if len(s) <= max_chars else s[:max_chars]


def truncate_with_ellipsis(s: str, max_chars: int) -> str:
    """Keep at most ``max_chars`` characters, appending an ellipsis if cut."""
    if len(s) <= max_chars:
        return s
    return s[:max_chars] + ELLIPSIS


def first_line_truncated(body: str, max_chars: int) -> str:
    """Return the first line, trimmed and truncated with an ellipsis."""
    first = body.split("\n", 1)[0].removesuffix("\r") if body else ""
    return truncate_with_ellipsis(first.strip(), max_chars)