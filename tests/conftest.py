"""Shared test fixtures for Dots tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from dots.clock import FixedClock
from dots.journal import Journal
from dots.models import QuestionType
from dots.questions import QuestionSet
from dots.store import MemoryStore

TODAY = "2026-02-11"


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def questions(store: MemoryStore) -> QuestionSet:
    qs = QuestionSet(store)
    qs.load()
    return qs


@pytest.fixture
def journal(store: MemoryStore, clock: FixedClock) -> Journal:
    return Journal(store, clock)


@pytest.fixture
def mixed_journal(store: MemoryStore, clock: FixedClock) -> Journal:
    """A journal with one question of each type instead of the defaults."""
    j = Journal(store, clock)
    j.delete_questions(range(len(j.questions)))
    j.add_question("Did you exercise?", QuestionType.YES_NO)
    j.add_question("Energy level?", QuestionType.SLIDER)
    j.add_question("Anything good happen?", QuestionType.FREE_TEXT)
    return j


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary workspace with a config file."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)
    config = {"timezone": "UTC", "reminder_time": "21:30"}
    (root / "config.yaml").write_text(
        yaml.dump(config, default_flow_style=False), encoding="utf-8"
    )
    monkeypatch.setenv("DOTS_ROOT", str(root))
    return root
