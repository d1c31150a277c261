"""Reader and writer for the restricted INI dialect used by ``.as`` directories.

Only ``[section]`` headers and ``key=value`` lines are understood. Comments
start with ``#`` or ``;``. Anything else is ignored rather than reported.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

IniSections = dict[str, dict[str, str]]

_SECTION_RE = re.compile(r"^\[(.+)\]$")
_ENTRY_RE = re.compile(r"^(.+?)=(.+)$")
COMMENT_PREFIXES = ("#", ";")


def parse(text: str) -> IniSections:
    sections: IniSections = {}
    current: dict[str, str] | None = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        section_match = _SECTION_RE.match(line)
        if section_match:
            current = {}
            sections[section_match.group(1)] = current
            continue

        if current is None:
            continue

        entry_match = _ENTRY_RE.match(line)
        if entry_match:
            key = entry_match.group(1).strip()
            value = entry_match.group(2).strip()
            current[key] = value

    return sections


def serialize(sections: Mapping[str, Mapping[str, object]]) -> str:
    lines: list[str] = []
    for name, entries in sections.items():
        lines.append(f"[{name}]")
        lines.extend(f"{key}={value}" for key, value in entries.items())
        lines.append("")
    return "\n".join(lines)
