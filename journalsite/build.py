#!/usr/bin/env python3
import sys
import shutil
from pathlib import Path
from datetime import date

import markdown       # pip install markdown
from bs4 import BeautifulSoup  # pip install beautifulsoup4

from journalsite.cleaning import ENTRY_FILENAME_RE, normalize_entry
from journalsite.config import get_config_path_from_args, load_config, resolve_path
from journalsite.pages import (
    render_compare_page,
    render_entry_page,
    render_home_page,
    render_stats_page,
)
from journalsite.textstats import aggregate, text_words


# -----------------------
# Loading entries
# -----------------------

def parse_entry_filename(name: str):
    """
    Parse "YYYY-MM-DD.md" into entry metadata:
      { "year": 2025, "month": 1, "day": 2, "month_day": "01-02",
        "slug": "2025-01-02", "_dt": date(2025, 1, 2) }

    Returns None for anything else, including impossible dates.
    """
    m = ENTRY_FILENAME_RE.match(name)
    if not m:
        return None
    y, mo, d = m.groups()
    try:
        dt = date(int(y), int(mo), int(d))
    except ValueError:
        return None
    return {
        "year": dt.year,
        "month": dt.month,
        "day": dt.day,
        "month_day": f"{mo}-{d}",
        "slug": f"{y}-{mo}-{d}",
        "_dt": dt,
    }


def wrap_images_with_figures(html_fragment: str) -> str:
    """
    Wrap <img> tags in <figure> with <figcaption> using the alt text.
    This exposes the Markdown alt text as a visible caption.
    """
    soup = BeautifulSoup(html_fragment, "html.parser")

    for img in soup.find_all("img"):
        if img.find_parent("figure"):
            continue

        alt = img.get("alt", "").strip()
        figure = soup.new_tag("figure")
        figure["class"] = "entry-figure"

        img.replace_with(figure)
        figure.append(img)

        if alt:
            caption = soup.new_tag("figcaption")
            caption.string = alt
            figure.append(caption)

    return str(soup)


def load_entries(entries_dir: Path) -> list:
    """
    Read every YYYY-MM-DD.md file in entries_dir, oldest first.

    Each entry gets its cleaned Markdown (content_md), rendered HTML (html)
    and stopword-filtered words (words).
    """
    if not entries_dir.is_dir():
        return []

    entries = []
    for md_file in sorted(entries_dir.glob("*.md")):
        meta = parse_entry_filename(md_file.name)
        if meta is None:
            continue

        content_md = normalize_entry(md_file.read_text(encoding="utf-8"))
        entry = dict(meta)
        entry["source_file"] = md_file
        entry["content_md"] = content_md
        entry["html"] = wrap_images_with_figures(markdown.markdown(content_md))
        entry["words"] = text_words(content_md)
        entries.append(entry)

    entries.sort(key=lambda x: x["_dt"])
    return entries


# -----------------------
# Output
# -----------------------

def check_output_dir(output_dir: Path, protected: list):
    """
    Exit before wiping output_dir if it is, or contains, any protected path
    (entries, the config directory, the stylesheet).
    """
    for path in protected:
        if path == output_dir or output_dir in path.parents:
            print(
                f"Refusing to build: output_dir {output_dir} would delete {path}",
                file=sys.stderr,
            )
            sys.exit(1)


def reset_output_dir(output_dir: Path):
    shutil.rmtree(output_dir, ignore_errors=True)
    output_dir.mkdir(parents=True, exist_ok=True)


def copy_static(css_src: Path, output_dir: Path):
    """Copy the stylesheet and write .nojekyll for GitHub Pages."""
    if css_src.exists():
        dest = output_dir / "style.css"
        shutil.copy2(css_src, dest)
        print(f"Copied CSS to {dest}")
    else:
        print(f"WARNING: CSS file not found at {css_src}", file=sys.stderr)

    (output_dir / ".nojekyll").write_text("", encoding="utf-8")


def write_page(path: Path, html_page: str):
    path.write_text(html_page, encoding="utf-8")
    print(f"Wrote {path}")


def write_entry_pages(entries: list, cfg: dict, output_dir: Path):
    entries_out = output_dir / "entries"
    entries_out.mkdir(parents=True, exist_ok=True)

    paths = [f"../entries/{e['slug']}.html" for e in entries]
    for i, e in enumerate(entries):
        prev_entry = entries[i - 1] if i > 0 else None
        next_entry = entries[i + 1] if i < len(entries) - 1 else None
        html_page = render_entry_page(e, prev_entry, next_entry, paths, cfg)
        out_path = entries_out / f"{e['slug']}.html"
        out_path.write_text(html_page, encoding="utf-8")
    print(f"Wrote {len(entries)} entry pages to {entries_out}")


def build_site(cfg: dict, project_root: Path) -> list:
    """Build the whole site; returns the loaded entries."""
    entries_dir = resolve_path(project_root, cfg["entries_dir"])
    output_dir = resolve_path(project_root, cfg["output_dir"])
    css_src = resolve_path(project_root, cfg["css_path"])

    check_output_dir(output_dir, [entries_dir, Path(project_root).resolve(), css_src])
    reset_output_dir(output_dir)
    copy_static(css_src, output_dir)

    entries = load_entries(entries_dir)
    stats = aggregate(entries)

    write_entry_pages(entries, cfg, output_dir)
    write_page(output_dir / "index.html", render_home_page(entries, cfg))
    write_page(output_dir / "compare.html", render_compare_page(entries, cfg))
    write_page(output_dir / "stats.html", render_stats_page(entries, stats, cfg))

    print(f"Built {len(entries)} entries to {output_dir}")
    return entries


# -----------------------
# main()
# -----------------------

def main(argv=None):
    config_path = get_config_path_from_args(argv)
    cfg = load_config(config_path)
    build_site(cfg, config_path.parent)


if __name__ == "__main__":
    main()
