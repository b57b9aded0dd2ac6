"""Journal: wires questions, today's answers, summaries and reminders together.

Editor commands go through the Journal so that every question edit is
persisted and followed by a reset of today's answers in one call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import time
from pathlib import Path
from typing import Any, Iterable

from dots.answers import DayAnswerStore
from dots.clock import Clock, DayKey, SystemClock
from dots.hooks import HookScheduler, run_hooks
from dots.models import DEFAULT_REMINDER_TIME, Question, QuestionType, Summary
from dots.questions import QuestionSet
from dots.reminder import NotificationScheduler, NullScheduler, get_reminder_time, set_reminder_time
from dots.store import FileStore, KeyValueStore
from dots.summary import SummaryRange, aggregate
from dots.workspace import get_user_timezone, load_settings, store_dir, workspace_root

logger = logging.getLogger(__name__)


@dataclass
class Activation:
    day: DayKey
    day_changed: bool
    complete: bool

    @property
    def landing_view(self) -> str:
        """'questions' on a new or unfinished day, 'summary' once today is done."""
        if self.complete and not self.day_changed:
            return "summary"
        return "questions"


class Journal:
    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock,
        scheduler: NotificationScheduler | None = None,
        hooks_root: Path | None = None,
        default_reminder: time = DEFAULT_REMINDER_TIME,
    ) -> None:
        self.store = store
        self.clock = clock
        self.scheduler = scheduler or NullScheduler()
        self.hooks_root = hooks_root
        self.default_reminder = default_reminder
        self.questions = QuestionSet(store)
        self.questions.load()
        self.today = DayAnswerStore(store, clock, self.questions)
        self.today.load()

    @classmethod
    def open(cls, root: Path | None = None) -> Journal:
        """Open the journal kept in a workspace directory."""
        if root is None:
            root = workspace_root()
        settings = load_settings(root)
        return cls(
            store=FileStore(store_dir(root)),
            clock=SystemClock(get_user_timezone(root)),
            scheduler=HookScheduler(root),
            hooks_root=root,
            default_reminder=settings.reminder_time,
        )

    def _hook(self, hook_point: str, context: dict[str, Any]) -> None:
        if self.hooks_root is not None:
            run_hooks(hook_point, context, self.hooks_root)

    # ── Day lifecycle ──────────────────────────────────────────

    @property
    def day(self) -> DayKey:
        return self.today.current_day

    def check_for_day_change(self) -> bool:
        previous = self.today.day
        changed = self.today.check_for_day_change_and_reload()
        if changed:
            self._hook("on_day_change", {"from": previous, "to": self.today.day})
        return changed

    def activate(self) -> Activation:
        """Run everything that must happen when the app comes to the foreground."""
        self.scheduler.clear()
        self.scheduler.reschedule(self.reminder_time())
        changed = self.check_for_day_change()
        return Activation(day=self.day, day_changed=changed, complete=self.today.is_complete())

    # ── Editor commands ────────────────────────────────────────

    def _after_edit(self, action: str) -> None:
        # never reset a stale day: that would wipe a saved past record
        self.check_for_day_change()
        self.today.reset()
        self._hook("on_questions_edit", {"action": action, "day": self.day, "questions": len(self.questions)})

    def add_question(self, text: str, qtype: QuestionType | str) -> Question:
        question = self.questions.add(text, qtype)
        self._after_edit("add")
        return question

    def update_question(self, question_id: str, text: str, qtype: QuestionType | str) -> bool:
        if not self.questions.update(question_id, text, qtype):
            return False
        self._after_edit("update")
        return True

    def delete_questions(self, indices: Iterable[int]) -> list[Question]:
        removed = self.questions.delete(indices)
        self._after_edit("delete")
        return removed

    def move_questions(self, from_indices: Iterable[int], to_index: int) -> None:
        self.questions.reorder(from_indices, to_index)
        self._after_edit("move")

    # ── Today's answers ────────────────────────────────────────

    def set_yes_no(self, question_id: str, value: bool) -> bool:
        return self.today.set_yes_no(question_id, value)

    def set_slider(self, question_id: str, value: float) -> bool:
        return self.today.set_slider(question_id, value)

    def set_free_text(self, question_id: str, value: str) -> bool:
        return self.today.set_free_text(question_id, value)

    def is_complete(self) -> bool:
        return self.today.is_complete()

    def save_answers(self) -> bool:
        ok = self.today.save()
        if ok:
            self._hook("post_save", {"day": self.day, "complete": self.today.is_complete()})
        return ok

    # ── Summary & reminder ─────────────────────────────────────

    def summary(self, range_: SummaryRange | str = SummaryRange.WEEK, as_of: DayKey | None = None) -> Summary:
        if as_of is None:
            as_of = self.clock.today_key()
        return aggregate(self.store, range_, list(self.questions), as_of)

    def reminder_time(self) -> time:
        return get_reminder_time(self.store, self.default_reminder)

    def set_reminder_time(self, at: time) -> bool:
        ok = set_reminder_time(self.store, at)
        self.scheduler.reschedule(at)
        return ok
