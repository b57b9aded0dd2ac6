"""The ordered, user-editable question list.

Every mutating method writes the whole list back to the store before it
returns. Write failures are logged and reported as False; the in-memory
list stays authoritative.
"""

from __future__ import annotations

import logging
import uuid
from typing import Iterable

from dots.codec import decode_questions, encode_questions
from dots.errors import DecodeError, EncodeError
from dots.models import Question, QuestionType
from dots.store import KeyValueStore

logger = logging.getLogger(__name__)

QUESTIONS_KEY = "questions"


def default_questions() -> list[Question]:
    return [
        Question(
            id="00000000-0000-0000-0000-000000000001",
            text="Did I make meaningful progress on something important today?",
            type=QuestionType.YES_NO,
        ),
        Question(
            id="00000000-0000-0000-0000-000000000002",
            text="Was I able to finish work without guilt or mental spillover?",
            type=QuestionType.YES_NO,
        ),
        Question(
            id="00000000-0000-0000-0000-000000000003",
            text="Did I do at least one thing that energized me outside of work?",
            type=QuestionType.FREE_TEXT,
        ),
        Question(
            id="00000000-0000-0000-0000-000000000004",
            text="Did I feel present during non-work activities today?",
            type=QuestionType.YES_NO,
        ),
        Question(
            id="00000000-0000-0000-0000-000000000005",
            text="Do I feel like I'm pacing myself in a sustainable way?",
            type=QuestionType.YES_NO,
        ),
    ]


def validate_question_text(text: str) -> list[str]:
    """Validate question text and return list of errors (empty if valid)."""
    if not (text or "").strip():
        return ["Question text must not be empty"]
    return []


def move_items(items: list, from_indices: Iterable[int], to_index: int) -> list:
    """Stable move of the items at *from_indices* to before *to_index*.

    *to_index* is a position in the list as it was before the move, and may
    equal len(items) to move to the end.
    """
    picked = sorted({i for i in from_indices if 0 <= i < len(items)})
    if not picked:
        return list(items)
    to_index = max(0, min(to_index, len(items)))
    moving = [items[i] for i in picked]
    picked_set = set(picked)
    rest = [it for i, it in enumerate(items) if i not in picked_set]
    insert_at = to_index - sum(1 for i in picked if i < to_index)
    return rest[:insert_at] + moving + rest[insert_at:]


class QuestionSet:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.questions: list[Question] = []

    def __iter__(self):
        return iter(self.questions)

    def __len__(self) -> int:
        return len(self.questions)

    def ids(self) -> list[str]:
        return [q.id for q in self.questions]

    def find(self, question_id: str) -> Question | None:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def load(self) -> list[Question]:
        """Load the persisted list, seeding and saving the defaults on first run."""
        blob = self.store.get(QUESTIONS_KEY)
        if blob is not None:
            try:
                self.questions = decode_questions(blob)
                return self.questions
            except DecodeError:
                logger.warning("Stored question list is unreadable, restoring defaults", exc_info=True)
        self.questions = default_questions()
        self.save()
        return self.questions

    def save(self) -> bool:
        try:
            self.store.set(QUESTIONS_KEY, encode_questions(self.questions))
        except (EncodeError, OSError):
            logger.warning("Failed to persist question list", exc_info=True)
            return False
        return True

    def add(self, text: str, qtype: QuestionType | str) -> Question:
        errors = validate_question_text(text)
        if errors:
            raise ValueError("; ".join(errors))
        question = Question(id=str(uuid.uuid4()), text=text, type=QuestionType(qtype))
        self.questions.append(question)
        self.save()
        return question

    def update(self, question_id: str, text: str, qtype: QuestionType | str) -> bool:
        """Replace text and type in place. Returns False if the id is unknown."""
        question = self.find(question_id)
        if question is None:
            return False
        question.text = text
        question.type = QuestionType(qtype)
        self.save()
        return True

    def delete(self, indices: Iterable[int]) -> list[Question]:
        """Remove the questions at the given positions. Returns the removed ones."""
        doomed = set(indices)
        removed = [q for i, q in enumerate(self.questions) if i in doomed]
        self.questions = [q for i, q in enumerate(self.questions) if i not in doomed]
        self.save()
        return removed

    def reorder(self, from_indices: Iterable[int], to_index: int) -> None:
        self.questions = move_items(self.questions, from_indices, to_index)
        self.save()
