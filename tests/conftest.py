"""
conftest.py
-----------
Shared pytest fixtures: a throwaway project directory with config.yml,
a stylesheet and an entries/ folder.
"""
import pytest
from pathlib import Path


SAMPLE_ENTRY = """## Must Do's
- [ ] Stretch
- [x] Write

Ran along the river this morning. The river was quiet.

Later I read about gardens.

[[link to]]
- yesterday
"""


@pytest.fixture
def project_dir(tmp_path):
    """Project root holding config.yml, public/style.css and entries/."""
    (tmp_path / "entries").mkdir()
    (tmp_path / "public").mkdir()
    (tmp_path / "public" / "style.css").write_text("body {}\n", encoding="utf-8")
    (tmp_path / "config.yml").write_text(
        'site_title: "Test Journal"\n'
        "entries_dir: entries\n"
        "output_dir: dist\n"
        "css_path: public/style.css\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def write_entry(project_dir):
    """Write an entry file: write_entry("2024-01-05", "text")."""
    def _write(slug: str, text: str) -> Path:
        path = project_dir / "entries" / f"{slug}.md"
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_entry():
    return SAMPLE_ENTRY
