"""JSON codecs for the blobs Dots keeps in its key-value store.

Decoders raise DecodeError for anything that is not a well-formed
record; encoders raise EncodeError. Callers decide whether to swallow.
"""

from __future__ import annotations

import json
from datetime import time
from typing import Any

from dots.errors import DecodeError, EncodeError
from dots.models import Answer, Question


def _loads(blob: bytes) -> Any:
    try:
        return json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(str(e)) from e


def _dumps(data: Any) -> bytes:
    try:
        return (json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False) + "\n").encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(str(e)) from e


# ── Questions ─────────────────────────────────────────────────


def encode_questions(questions: list[Question]) -> bytes:
    return _dumps([q.to_dict() for q in questions])


def decode_questions(blob: bytes) -> list[Question]:
    data = _loads(blob)
    if not isinstance(data, list):
        raise DecodeError("questions blob is not a list")
    try:
        return [Question.from_dict(d) for d in data]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodeError(f"invalid question record: {e}") from e


# ── Answers ───────────────────────────────────────────────────


def encode_answers(answers: dict[str, Answer]) -> bytes:
    return _dumps({qid: a.to_dict() for qid, a in answers.items()})


def decode_answers(blob: bytes) -> dict[str, Answer]:
    """Decode a questionID -> Answer mapping."""
    data = _loads(blob)
    if not isinstance(data, dict):
        raise DecodeError("answers blob is not an object")
    out: dict[str, Answer] = {}
    try:
        for qid, d in data.items():
            out[str(qid)] = Answer.from_dict(d)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodeError(f"invalid answer record: {e}") from e
    return out


# ── Reminder time ─────────────────────────────────────────────


def encode_time(t: time) -> bytes:
    return _dumps(t.strftime("%H:%M"))


def decode_time(blob: bytes) -> time:
    data = _loads(blob)
    if not isinstance(data, str):
        raise DecodeError("time blob is not a string")
    try:
        return time.fromisoformat(data)
    except ValueError as e:
        raise DecodeError(str(e)) from e
