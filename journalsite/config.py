import shlex
import sys
from pathlib import Path

import yaml           # pip install pyyaml

DEFAULT_CONFIG_NAME = "config.yml"

DEFAULT_REPO_URL = "https://github.com/tchan1002/obsidian.git"
DEFAULT_VAULT_PATH = "Obsidian Vault/100 Days"


def get_config_path_from_args(argv=None) -> Path:
    """
    Determine which config file to use.

    - If a path is passed as first argument, use that.
    - Otherwise, assume config.yml in the current directory.
    """
    args = sys.argv[1:] if argv is None else argv
    if args:
        return Path(args[0]).resolve()
    return (Path.cwd() / DEFAULT_CONFIG_NAME).resolve()


def _as_list(value) -> list:
    # extra_head can be a string or a list
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(x) for x in value]
    return []


def _as_command(value) -> list:
    # "npm run deploy" or ["npm", "run", "deploy"]
    if isinstance(value, str):
        return shlex.split(value)
    return _as_list(value)


def load_config(config_path: Path) -> dict:
    """Load YAML config and apply defaults."""
    if not config_path.exists():
        print(f"Config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)

    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    sync = data.get("sync") or {}

    cfg = {
        "site_title": data.get("site_title", "Journal"),
        "entries_dir": data.get("entries_dir", "entries"),
        "output_dir": data.get("output_dir", "dist"),
        "css_path": data.get("css_path", "public/style.css"),
        "extra_head": _as_list(data.get("extra_head", [])),
        # Stats page thresholds
        "trend_min_count": int(data.get("trend_min_count", 10)),
        "hottest_limit": int(data.get("hottest_limit", 50)),
        "top_words_min_count": int(data.get("top_words_min_count", 10)),
        "sync": {
            "repo_url": sync.get("repo_url", DEFAULT_REPO_URL),
            "vault_path": sync.get("vault_path", DEFAULT_VAULT_PATH),
            "checkout_dir": sync.get("checkout_dir", "temp-obsidian"),
            "build_after_sync": bool(sync.get("build_after_sync", True)),
            "deploy_command": _as_command(sync.get("deploy_command")),
        },
    }
    return cfg


def resolve_path(project_root: Path, value) -> Path:
    """Resolve a config path relative to the directory holding config.yml."""
    return (Path(project_root) / value).resolve()
