"""Typed dataclasses for the Dots data model.

All persisted models use from_dict/to_dict for JSON serialization.
Keys in JSON are camelCase (questionID, yesNoValue, ...); Python
attributes are snake_case. Persisted records are read strictly:
a missing identifier or an unknown question type raises, so that
the codec layer can treat the whole blob as corrupt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Any


# ── Questions ─────────────────────────────────────────────────


class QuestionType(str, Enum):
    YES_NO = "yesNo"
    SLIDER = "slider"
    FREE_TEXT = "freeText"

    @property
    def display_name(self) -> str:
        return {
            QuestionType.YES_NO: "Yes/No",
            QuestionType.SLIDER: "Slider",
            QuestionType.FREE_TEXT: "Free Text",
        }[self]


@dataclass
class Question:
    id: str
    text: str
    type: QuestionType = QuestionType.YES_NO

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Question:
        return cls(
            id=str(d["id"]),
            text=str(d.get("text", "")),
            type=QuestionType(d["type"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "type": self.type.value}


# ── Answers ───────────────────────────────────────────────────


@dataclass
class Answer:
    """One day's answer to one question. Every value starts unset."""

    id: str
    question_id: str
    day: str
    yes_no_value: bool | None = None
    slider_value: float | None = None
    free_text_value: str | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Answer:
        yes_no = d.get("yesNoValue")
        if yes_no is not None and not isinstance(yes_no, bool):
            raise ValueError(f"yesNoValue must be a bool, got {yes_no!r}")
        slider = d.get("sliderValue")
        if slider is not None:
            if isinstance(slider, bool) or not isinstance(slider, (int, float)):
                raise ValueError(f"sliderValue must be numeric, got {slider!r}")
            slider = float(slider)
        text = d.get("freeTextValue")
        return cls(
            id=str(d["id"]),
            question_id=str(d["questionID"]),
            day=str(d.get("day", "")),
            yes_no_value=yes_no,
            slider_value=slider,
            free_text_value=None if text is None else str(text),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "questionID": self.question_id,
            "day": self.day,
            "yesNoValue": self.yes_no_value,
            "sliderValue": self.slider_value,
            "freeTextValue": self.free_text_value,
        }

    def is_answered_for(self, qtype: QuestionType) -> bool:
        """Whether this answer satisfies the completeness rule for *qtype*.

        Free-text questions count as answered once the yes/no flag is set;
        the text body itself is optional.
        """
        if qtype is QuestionType.SLIDER:
            return self.slider_value is not None
        return self.yes_no_value is not None


# ── Settings ──────────────────────────────────────────────────


DEFAULT_REMINDER_TIME = time(22, 0)


@dataclass
class Settings:
    timezone: str | None = None
    reminder_time: time = DEFAULT_REMINDER_TIME

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        reminder = d.get("reminder_time")
        if isinstance(reminder, int) and not isinstance(reminder, bool):
            # unquoted 22:00 is read by YAML 1.1 as sexagesimal minutes
            hour, minute = divmod(reminder, 60)
            reminder_time = time(hour % 24, minute)
        elif reminder:
            reminder_time = time.fromisoformat(str(reminder))
        else:
            reminder_time = DEFAULT_REMINDER_TIME
        return cls(
            timezone=d.get("timezone") or None,
            reminder_time=reminder_time,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"reminder_time": self.reminder_time.strftime("%H:%M")}
        if self.timezone:
            d["timezone"] = self.timezone
        return d


# ── Summary ───────────────────────────────────────────────────


@dataclass
class YesNoStats:
    yes_count: int = 0
    no_count: int = 0

    @property
    def total(self) -> int:
        return self.yes_count + self.no_count

    @property
    def yes_percent(self) -> float:
        if self.total == 0:
            return 0.0
        return self.yes_count / self.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "yesCount": self.yes_count,
            "noCount": self.no_count,
            "total": self.total,
            "yesPercent": round(self.yes_percent, 3),
        }


@dataclass
class SliderStats:
    values: list[float] = field(default_factory=list)

    @property
    def mean(self) -> float | None:
        """Arithmetic mean, or None when there is no data."""
        if not self.values:
            return None
        return sum(self.values) / len(self.values)

    def to_dict(self) -> dict[str, Any]:
        mean = self.mean
        return {
            "count": len(self.values),
            "mean": None if mean is None else round(mean, 3),
        }


@dataclass
class FreeTextStats:
    responses: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"responses": list(self.responses)}


@dataclass
class QuestionSummary:
    question: Question
    yes_no: YesNoStats | None = None
    slider: SliderStats | None = None
    free_text: FreeTextStats | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"question": self.question.to_dict()}
        if self.yes_no is not None:
            d["yesNo"] = self.yes_no.to_dict()
        if self.slider is not None:
            d["slider"] = self.slider.to_dict()
        if self.free_text is not None:
            d["freeText"] = self.free_text.to_dict()
        return d


@dataclass
class Summary:
    range: str = ""
    as_of: str = ""
    days: list[str] = field(default_factory=list)
    questions: list[QuestionSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "range": self.range,
            "asOf": self.as_of,
            "days": list(self.days),
            "questions": [q.to_dict() for q in self.questions],
        }
