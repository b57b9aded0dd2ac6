"""Workspace root, configuration, timezone and path helpers for Dots."""

from __future__ import annotations

import logging
import os
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from dots.fileio import read_yaml, write_yaml_atomic
from dots.models import Settings

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Get the workspace root directory (holds config.yaml, hooks.yaml and store/)."""
    return Path(
        os.environ.get("DOTS_ROOT", str(Path.home() / ".dots"))
    ).expanduser().resolve()


def load_settings(root: Path | None = None) -> Settings:
    """Load config.yaml into a Settings model; missing file gives defaults."""
    if root is None:
        root = workspace_root()
    try:
        return Settings.from_dict(read_yaml(config_path(root)))
    except Exception:
        logger.warning("Could not read %s, using defaults", config_path(root), exc_info=True)
        return Settings()


def init_workspace(root: Path | None = None) -> Path:
    """Create the workspace layout, seeding config.yaml with defaults if absent."""
    if root is None:
        root = workspace_root()
    store_dir(root).mkdir(parents=True, exist_ok=True)
    if not config_path(root).exists():
        write_yaml_atomic(config_path(root), Settings().to_dict())
        logger.info("Created %s", config_path(root))
    return root


def get_user_timezone(root: Path | None = None) -> tzinfo | None:
    """Get the configured timezone.

    None means the system local zone, which the clock re-reads on every call
    so that DST transitions are followed.
    """
    settings = load_settings(root)
    if settings.timezone:
        try:
            return ZoneInfo(settings.timezone)
        except (KeyError, ValueError):
            logger.warning("Unknown timezone %r in config, using local time", settings.timezone)
    return None


# ── Path helpers ──────────────────────────────────────────────

def config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "config.yaml"


def store_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "store"


def hooks_config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "hooks.yaml"


def log_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "dots.log"
