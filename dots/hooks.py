"""Lifecycle hooks for Dots.

Hooks run shell commands at key points in the journal lifecycle.
Configured via hooks.yaml in the workspace root, e.g.

    post_save:
      - ./backup.sh
    reschedule_reminder:
      - command: ./install-reminder.sh
        timeout: 10

Hook points:
- post_save
- on_day_change
- on_questions_edit
- reschedule_reminder, clear_reminders
"""

from __future__ import annotations

import json
import logging
import subprocess
from datetime import time
from pathlib import Path
from typing import Any

import yaml

from dots.fileio import read_yaml
from dots.workspace import hooks_config_path, workspace_root

logger = logging.getLogger(__name__)


VALID_HOOK_POINTS = {
    "post_save",
    "on_day_change",
    "on_questions_edit",
    "reschedule_reminder",
    "clear_reminders",
}

DEFAULT_TIMEOUT = 30
OUTPUT_LIMIT = 4096


def load_hooks_config(root: Path | None = None) -> dict[str, Any]:
    """Load hooks configuration from hooks.yaml."""
    if root is None:
        root = workspace_root()
    path = hooks_config_path(root)
    if not path.exists():
        return {}
    try:
        return read_yaml(path)
    except yaml.YAMLError:
        logger.warning("Could not parse %s, no hooks will run", path, exc_info=True)
        return {}


def hook_commands(config: dict[str, Any], hook_point: str) -> list[tuple[str, float]]:
    """(command, timeout) pairs registered for *hook_point*, malformed entries dropped."""
    entries = config.get(hook_point)
    if not isinstance(entries, list):
        return []
    commands = []
    for entry in entries:
        if isinstance(entry, str):
            command, timeout = entry, DEFAULT_TIMEOUT
        elif isinstance(entry, dict):
            command, timeout = entry.get("command", ""), entry.get("timeout", DEFAULT_TIMEOUT)
        else:
            logger.warning("Ignoring %s hook entry %r", hook_point, entry)
            continue
        if command:
            commands.append((command, timeout))
    return commands


def _run_one(command: str, timeout: float, payload: str, root: Path) -> dict[str, Any]:
    try:
        proc = subprocess.run(
            command,
            shell=True,
            input=payload,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=str(root),
        )
    except subprocess.TimeoutExpired:
        return {"exit_code": -1, "error": f"Hook timed out after {timeout}s"}
    except OSError as e:
        return {"exit_code": -1, "error": str(e)}
    return {
        "exit_code": proc.returncode,
        "stdout": proc.stdout[:OUTPUT_LIMIT],
        "stderr": proc.stderr[:OUTPUT_LIMIT],
    }


def run_hooks(
    hook_point: str,
    context: dict[str, Any],
    root: Path | None = None,
) -> list[dict[str, Any]]:
    """Run every command registered for *hook_point*, in order.

    Each command gets ``{"hook_point": ..., **context}`` as JSON on stdin and
    runs with the workspace root as its working directory. A failing hook is
    logged and reported in the returned results; it never raises.
    """
    if hook_point not in VALID_HOOK_POINTS:
        return []
    if root is None:
        root = workspace_root()

    payload = json.dumps({"hook_point": hook_point, **context}, ensure_ascii=False)
    results = []
    for command, timeout in hook_commands(load_hooks_config(root), hook_point):
        result: dict[str, Any] = {"command": command, "hook_point": hook_point}
        result.update(_run_one(command, timeout, payload, root))
        if result["exit_code"] != 0:
            logger.warning(
                "Hook %r for %s failed (exit %d): %s",
                command, hook_point, result["exit_code"], result.get("error") or result.get("stderr", "").strip(),
            )
        results.append(result)
    return results


class HookScheduler:
    """Notification scheduler that hands reminder changes to shell hooks."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root

    def reschedule(self, at: time) -> None:
        run_hooks("reschedule_reminder", {"time": at.strftime("%H:%M")}, self.root)

    def clear(self) -> None:
        run_hooks("clear_reminders", {}, self.root)
