#!/usr/bin/env python3
"""
Pull journal entries from the Obsidian vault repository, then rebuild.

Steps: clone (or pull) the vault, copy the dated entries into entries_dir,
build the site, run the optional deploy command, remove the checkout.
"""
import sys
import shutil
import subprocess
from pathlib import Path

from journalsite.build import build_site
from journalsite.cleaning import is_entry_filename
from journalsite.config import get_config_path_from_args, load_config, resolve_path


def run_git(args: list, cwd=None):
    return subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)


def fetch_repo(repo_url: str, checkout_dir: Path):
    """Clone repo_url into checkout_dir, or pull if the clone already exists."""
    try:
        run_git(["clone", repo_url, str(checkout_dir)])
        print("Cloned Obsidian repo")
    except subprocess.CalledProcessError:
        if not (checkout_dir / ".git").is_dir():
            raise
        print("Pulling latest changes...")
        run_git(["pull"], cwd=checkout_dir)
        print("Updated Obsidian repo")


def copy_entries(source_dir: Path, entries_dir: Path) -> list:
    """Copy YYYY-MM-DD.md files from source_dir; returns the copied names."""
    entries_dir.mkdir(parents=True, exist_ok=True)

    names = sorted(
        p.name for p in source_dir.iterdir()
        if p.is_file() and is_entry_filename(p.name)
    )
    print(f"Found {len(names)} journal entries in {source_dir}")

    for name in names:
        shutil.copy2(source_dir / name, entries_dir / name)
        print(f"Synced: {name}")
    return names


def sync(cfg: dict, project_root: Path) -> list:
    sync_cfg = cfg["sync"]
    checkout_dir = resolve_path(project_root, sync_cfg["checkout_dir"])
    source_dir = checkout_dir / sync_cfg["vault_path"]
    entries_dir = resolve_path(project_root, cfg["entries_dir"])

    print(f"Source: {source_dir}")
    print(f"Destination: {entries_dir}")

    fetch_repo(sync_cfg["repo_url"], checkout_dir)
    names = copy_entries(source_dir, entries_dir)

    if sync_cfg["build_after_sync"]:
        print("Building site...")
        build_site(cfg, project_root)

    if sync_cfg["deploy_command"]:
        print("Deploying...")
        subprocess.run(sync_cfg["deploy_command"], cwd=project_root, check=True)

    shutil.rmtree(checkout_dir, ignore_errors=True)
    print("Cleaned up temporary files")
    return names


def main(argv=None):
    config_path = get_config_path_from_args(argv)
    cfg = load_config(config_path)

    try:
        names = sync(cfg, config_path.parent)
    except (subprocess.CalledProcessError, OSError) as e:
        detail = getattr(e, "stderr", None) or str(e)
        print(f"Error: {detail.strip()}", file=sys.stderr)
        sys.exit(1)

    print(f"Sync complete: {len(names)} entries")


if __name__ == "__main__":
    main()
