#!/usr/bin/env python3
"""
Strip the daily boilerplate from journal entries.

Each entry starts with a "Must Do's" checklist and ends with a link/closer
section ("[[link to]]", "Are we closer", "100 days"). Only the text between
the two is kept.
"""
import re
import sys
from pathlib import Path

from journalsite.config import get_config_path_from_args, load_config, resolve_path

# Matches entry files like "2025-01-02.md"
ENTRY_FILENAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})\.md$")

MUST_DO_RE = re.compile(r"^\s*#{0,6}\s*Must Do['’]?s\b", re.IGNORECASE)

# Lines allowed to follow the Must Do's heading
CHECKLIST_LINE_RES = (
    re.compile(r"^\s*[-*+]\s+"),
    re.compile(r"^\s*\d+\.\s+"),
    re.compile(r"^\s*\[[ xX]\]\s+"),
    re.compile(r"^\s*$"),
)

FOOTER_RES = (
    re.compile(r"\[\[\s*link\s*to\s*\]\]", re.IGNORECASE),
    re.compile(r"^\s*#{0,6}\s*link\s*to\b", re.IGNORECASE),
    re.compile(r"^\s*#{0,6}\s*are\s*we\s*closer\b", re.IGNORECASE),
    re.compile(r"\b100\s*days\b", re.IGNORECASE),
)

BLANK_RUN_RE = re.compile(r"\n{3,}")


def is_entry_filename(name: str) -> bool:
    return ENTRY_FILENAME_RE.match(name) is not None


def find_body_start(lines: list) -> int:
    """Index of the first line after the Must Do's checklist (0 if absent)."""
    for i, line in enumerate(lines):
        if not MUST_DO_RE.match(line):
            continue
        j = i + 1
        while j < len(lines) and any(r.match(lines[j]) for r in CHECKLIST_LINE_RES):
            j += 1
        return j
    return 0


def find_body_end(lines: list, start: int) -> int:
    """Index of the first footer marker at or after start (len(lines) if absent)."""
    for i in range(start, len(lines)):
        if any(r.search(lines[i]) for r in FOOTER_RES):
            return i
    return len(lines)


def normalize_entry(text: str) -> str:
    """
    Return the analyzable body of a raw entry.

    Blank-line runs collapse to a single blank line, the result is stripped
    and ends with exactly one newline. Entries made only of boilerplate
    become "".
    """
    lines = (text or "").split("\n")
    start = find_body_start(lines)
    end = find_body_end(lines, start)

    body = BLANK_RUN_RE.sub("\n\n", "\n".join(lines[start:end])).strip()
    return body + "\n" if body else ""


def clean_entries(entries_dir: Path):
    """
    Rewrite every entry file in place with its boilerplate removed.
    Returns (changed, total).
    """
    changed = 0
    total = 0
    for path in sorted(entries_dir.iterdir()):
        if not path.is_file() or not is_entry_filename(path.name):
            continue
        total += 1
        original = path.read_text(encoding="utf-8")
        cleaned = normalize_entry(original)
        if cleaned != original:
            path.write_text(cleaned, encoding="utf-8")
            changed += 1
    return changed, total


def main(argv=None):
    config_path = get_config_path_from_args(argv)
    cfg = load_config(config_path)
    entries_dir = resolve_path(config_path.parent, cfg["entries_dir"])

    if not entries_dir.is_dir():
        print(f"Entries directory not found: {entries_dir}", file=sys.stderr)
        sys.exit(1)

    changed, total = clean_entries(entries_dir)
    print(f"Cleaned {changed}/{total} entries in {entries_dir}")


if __name__ == "__main__":
    main()
