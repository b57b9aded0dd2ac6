"""Today's working answer set and its day-boundary lifecycle.

DayAnswerStore moves through three states:

    UNINITIALIZED --load()--> LOADED(today)
    LOADED(d) --clock reads a day != d--> STALE --reload--> LOADED(today)
    LOADED(d) --question edit--> LOADED(d) with a fresh empty set

The day a set belongs to is fixed when it is loaded. save() always writes
under that day, and a day change always reloads before the set is exposed
again, so one day's edits never show up under another day's label.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from dots.clock import Clock, DayKey, answers_key
from dots.codec import decode_answers, encode_answers
from dots.errors import DecodeError, DotsError, EncodeError
from dots.models import Answer, Question
from dots.questions import QuestionSet
from dots.store import KeyValueStore

logger = logging.getLogger(__name__)

AnswerMap = dict[str, Answer]


class DayState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    STALE = "stale"


# ── Pure helpers ──────────────────────────────────────────────


def empty_answers(questions: Iterable[Question], day: DayKey) -> AnswerMap:
    """One unanswered Answer per question, keyed by question id."""
    return {
        q.id: Answer(id=str(uuid.uuid4()), question_id=q.id, day=day)
        for q in questions
    }


def is_complete(questions: Iterable[Question], answers: AnswerMap) -> bool:
    """True iff every question has the value its type requires.

    Answers for questions not in *questions* are ignored.
    """
    for q in questions:
        answer = answers.get(q.id)
        if answer is None or not answer.is_answered_for(q.type):
            return False
    return True


def read_day(store: KeyValueStore, day: DayKey) -> AnswerMap | None:
    """Read one persisted day. Missing and unreadable records both give None."""
    blob = store.get(answers_key(day))
    if blob is None:
        return None
    try:
        return decode_answers(blob)
    except DecodeError:
        logger.warning("Answers for %s are unreadable, treating as empty", day, exc_info=True)
        return None


@dataclass
class DayTransition:
    last_day: DayKey
    answers: AnswerMap
    did_reset: bool


def advance_day(
    last_day: DayKey | None,
    now_day: DayKey,
    current: AnswerMap,
    load: Callable[[DayKey], AnswerMap],
) -> DayTransition:
    """Decide whether the working set must be replaced for *now_day*.

    *load* builds the set for a day (persisted record or a fresh empty one).
    It is only called when the day actually changed.
    """
    if last_day == now_day:
        return DayTransition(last_day=last_day, answers=current, did_reset=False)
    return DayTransition(last_day=now_day, answers=load(now_day), did_reset=True)


# ── Stateful store ────────────────────────────────────────────


class DayAnswerStore:
    def __init__(self, store: KeyValueStore, clock: Clock, questions: QuestionSet) -> None:
        self.store = store
        self.clock = clock
        self.questions = questions
        self.state = DayState.UNINITIALIZED
        self.day: DayKey | None = None
        self.answers: AnswerMap = {}
        self.saved = False

    def _load_for(self, day: DayKey) -> AnswerMap:
        persisted = read_day(self.store, day)
        if persisted is not None:
            self.saved = True
            logger.info("Loaded saved answers for %s", day)
            return persisted
        self.saved = False
        logger.info("Starting empty answer set for %s", day)
        return empty_answers(self.questions, day)

    def load(self) -> AnswerMap:
        """Load (or synthesize) the set for the clock's current day."""
        today = self.clock.today_key()
        self.answers = self._load_for(today)
        self.day = today
        self.state = DayState.LOADED
        return self.answers

    def check_for_day_change_and_reload(self) -> bool:
        """Reload if the live day moved past the loaded one. Returns True on reload."""
        now_day = self.clock.today_key()
        if self.state is DayState.UNINITIALIZED:
            self.load()
            return False
        if self.day != now_day:
            logger.info("Day changed from %s to %s", self.day, now_day)
            self.state = DayState.STALE
        transition = advance_day(self.day, now_day, self.answers, self._load_for)
        self.day = transition.last_day
        self.answers = transition.answers
        self.state = DayState.LOADED
        return transition.did_reset

    @property
    def current_day(self) -> DayKey:
        """The day the working set belongs to. Raises before the first load."""
        if self.day is None:
            raise DotsError("answer set has not been loaded")
        return self.day

    def reset(self) -> None:
        """Discard the current day's set, persisted or not, and start it over."""
        if self.state is not DayState.LOADED or self.day is None:
            self.load()
        day = self.current_day
        logger.info("Resetting answers for %s", day)
        try:
            self.store.remove(answers_key(day))
        except OSError:
            logger.warning("Failed to remove saved answers for %s", day, exc_info=True)
        self.answers = empty_answers(self.questions, day)
        self.saved = False

    def _answer(self, question_id: str) -> Answer | None:
        return self.answers.get(question_id)

    def set_yes_no(self, question_id: str, value: bool) -> bool:
        answer = self._answer(question_id)
        if answer is None:
            return False
        answer.yes_no_value = value
        self.saved = False
        return True

    def set_slider(self, question_id: str, value: float) -> bool:
        answer = self._answer(question_id)
        if answer is None:
            return False
        answer.slider_value = float(value)
        self.saved = False
        return True

    def set_free_text(self, question_id: str, value: str) -> bool:
        answer = self._answer(question_id)
        if answer is None:
            return False
        answer.free_text_value = value
        self.saved = False
        return True

    def is_complete(self) -> bool:
        return is_complete(self.questions, self.answers)

    def missing(self) -> list[Question]:
        """Questions still lacking the value their type requires."""
        return [
            q for q in self.questions
            if q.id not in self.answers or not self.answers[q.id].is_answered_for(q.type)
        ]

    def save(self) -> bool:
        """Write the whole set under its own day. False if it could not be written."""
        if self.day is None:
            return False
        try:
            self.store.set(answers_key(self.day), encode_answers(self.answers))
        except (EncodeError, OSError):
            logger.warning("Failed to persist answers for %s", self.day, exc_info=True)
            return False
        self.saved = True
        logger.info("Saved answers for %s", self.day)
        return True

