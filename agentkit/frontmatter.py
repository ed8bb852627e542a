"""Minimal YAML front-matter splitter for markdown documents.

Only the shapes that skill and rule files use are understood: scalar
``key: value`` pairs and ``key:`` followed by ``- item`` lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field

FmValue = str | list[str]


@dataclass
class Frontmatter:
    """Parsed front-matter fields."""

    fields: dict[str, FmValue] = field(default_factory=dict)

    def get_string(self, key: str) -> str | None:
        """Return a scalar field, or None if absent or a list."""
        value = self.fields.get(key)
        return value if isinstance(value, str) else None

    def get_list(self, key: str) -> list[str]:
        """Return a list field; a scalar becomes a one-item list."""
        value = self.fields.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)


def _lines(content: str) -> list[str]:
    if not content:
        return []
    parts = content.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p.removesuffix("\r") for p in parts]


def split(content: str) -> tuple[Frontmatter | None, str]:
    """Split a document into front matter and body.

    Without an opening and closing ``---`` line, the whole input is the body.
    """
    lines = _lines(content)
    if not lines:
        return None, ""
    if lines[0].strip() != "---":
        return None, content

    yaml_lines: list[str] = []
    body_lines: list[str] = []
    in_yaml = True
    for line in lines[1:]:
        if in_yaml:
            if line.strip() == "---":
                in_yaml = False
                continue
            yaml_lines.append(line)
        else:
            body_lines.append(line)
    if in_yaml:
        return None, content

    body = "".join(f"{line}\n" for line in body_lines).lstrip("\n")
    return _parse_yaml_lite(yaml_lines), body


def _parse_yaml_lite(lines: list[str]) -> Frontmatter:
    fields: dict[str, FmValue] = {}
    list_key: str | None = None
    items: list[str] = []

    for raw in lines:
        line = raw.rstrip()
        stripped = line.lstrip()
        if not line or stripped.startswith("#"):
            continue

        if list_key is not None and stripped.startswith("- "):
            items.append(_strip_quotes(stripped[2:]))
            continue

        if list_key is not None:
            fields[list_key] = items
            list_key, items = None, []

        key, sep, value = line.partition(":")
        if not sep:
            continue
        key, value = key.strip(), value.strip()
        if value:
            fields[key] = _strip_quotes(value)
        else:
            list_key = key

    if list_key is not None:
        fields[list_key] = items
    return Frontmatter(fields)


def _strip_quotes(s: str) -> str:
    s = s.strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in "\"'":
        return s[1:-1]
    return s