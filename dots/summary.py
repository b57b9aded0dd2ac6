"""Summary aggregation over a window of saved days.

Only persisted days are read; the unsaved in-memory set for today never
contributes. Days without a readable record are left out, not zero-filled.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from dots.answers import AnswerMap, read_day
from dots.clock import DayKey, days_back
from dots.models import (
    Answer,
    FreeTextStats,
    Question,
    QuestionSummary,
    QuestionType,
    SliderStats,
    Summary,
    YesNoStats,
)
from dots.store import KeyValueStore

NO_DETAILS = "(No details provided)"


class SummaryRange(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

    @property
    def days(self) -> int:
        return {SummaryRange.TODAY: 1, SummaryRange.WEEK: 7, SummaryRange.MONTH: 30}[self]

    @property
    def title(self) -> str:
        return self.value.capitalize()


def range_days(range_: SummaryRange | str, as_of: DayKey) -> list[DayKey]:
    """Day keys in the window ending at *as_of*, most recent first."""
    return days_back(as_of, SummaryRange(range_).days)


def load_days(store: KeyValueStore, days: Iterable[DayKey]) -> list[tuple[DayKey, AnswerMap]]:
    """Read each day, keeping order and skipping days with no usable record."""
    out = []
    for day in days:
        answers = read_day(store, day)
        if answers is not None:
            out.append((day, answers))
    return out


def summarize_question(question: Question, answers: list[Answer]) -> QuestionSummary:
    """Reduce one question's answers (already in display order) to stats."""
    summary = QuestionSummary(question=question)
    if question.type is QuestionType.YES_NO:
        summary.yes_no = YesNoStats(
            yes_count=sum(1 for a in answers if a.yes_no_value is True),
            no_count=sum(1 for a in answers if a.yes_no_value is False),
        )
    elif question.type is QuestionType.SLIDER:
        summary.slider = SliderStats(
            values=[a.slider_value for a in answers if a.slider_value is not None],
        )
    else:
        # free text entries are gated on the yes/no flag, body optional
        summary.free_text = FreeTextStats(
            responses=[a.free_text_value or NO_DETAILS for a in answers if a.yes_no_value is True],
        )
    return summary


def aggregate(
    store: KeyValueStore,
    range_: SummaryRange | str,
    questions: Iterable[Question],
    as_of: DayKey,
) -> Summary:
    """Per-question statistics for the saved days in the window."""
    range_ = SummaryRange(range_)
    loaded = load_days(store, range_days(range_, as_of))
    summary = Summary(range=range_.value, as_of=as_of, days=[day for day, _ in loaded])
    for question in questions:
        matched = [answers[question.id] for _, answers in loaded if question.id in answers]
        summary.questions.append(summarize_question(question, matched))
    return summary
