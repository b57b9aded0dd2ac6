from __future__ import annotations

import logging
import os
import secrets
import threading
from contextlib import asynccontextmanager
from datetime import time
from typing import Any, Iterator

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel, Field

from dots import (
    Journal,
    QuestionType,
    SummaryRange,
    render_summary,
    validate_question_text,
)
from dots.logconfig import configure_logging

logger = logging.getLogger(__name__)


# ── App & auth ────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    yield


app = FastAPI(title="Dots", version="0.1.0", lifespan=lifespan)

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("DOTS_USERNAME", "")
    expected_password = os.environ.get("DOTS_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Journal dependency ────────────────────────────────────────

_journal: Journal | None = None
journal_lock = threading.Lock()


def journal_instance() -> Journal:
    """The process-wide journal; today's unsaved answers live here between requests."""
    global _journal
    with journal_lock:
        if _journal is None:
            _journal = Journal.open()
    return _journal


def get_journal(
    journal: Journal = Depends(journal_instance),
    username: str = Depends(get_current_user),
) -> Iterator[Journal]:
    """Hand out the journal for the length of one request.

    Sync endpoints run in a threadpool; requests are serialized so an edit
    can never interleave with another request's save.
    """
    with journal_lock:
        journal.check_for_day_change()
        yield journal


# ── Schemas ───────────────────────────────────────────────────


class AnswerIn(BaseModel):
    question_id: str
    yes_no: bool | None = None
    slider: float | None = Field(default=None, ge=1, le=10)
    free_text: str | None = None


class QuestionIn(BaseModel):
    text: str
    type: QuestionType = QuestionType.YES_NO


class MoveIn(BaseModel):
    from_indices: list[int]
    to_index: int


class ReminderIn(BaseModel):
    time: str


def _today_payload(journal: Journal) -> dict[str, Any]:
    rows = []
    for q in journal.questions:
        answer = journal.today.answers.get(q.id)
        rows.append({
            "question": q.to_dict(),
            "answer": answer.to_dict() if answer else None,
        })
    return {
        "day": journal.day,
        "complete": journal.is_complete(),
        "saved": journal.today.saved,
        "questions": rows,
    }


# ── Endpoints ─────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.post("/api/activate")
def api_activate(journal: Journal = Depends(get_journal)) -> dict[str, Any]:
    result = journal.activate()
    return {
        "day": result.day,
        "dayChanged": result.day_changed,
        "complete": result.complete,
        "landingView": result.landing_view,
    }


@app.get("/api/today")
def api_today(journal: Journal = Depends(get_journal)) -> dict[str, Any]:
    return _today_payload(journal)


@app.post("/api/today/answers")
def api_set_answer(payload: AnswerIn, journal: Journal = Depends(get_journal)) -> dict[str, Any]:
    qid = payload.question_id
    if qid not in journal.today.answers:
        raise HTTPException(status_code=404, detail=f"No answer slot for question {qid}")
    if payload.yes_no is not None:
        journal.set_yes_no(qid, payload.yes_no)
    if payload.slider is not None:
        journal.set_slider(qid, payload.slider)
    if payload.free_text is not None:
        journal.set_free_text(qid, payload.free_text)
    return _today_payload(journal)


@app.post("/api/today/save")
def api_save(journal: Journal = Depends(get_journal)) -> dict[str, Any]:
    if not journal.is_complete():
        missing = [q.text for q in journal.today.missing()]
        raise HTTPException(status_code=409, detail={"reason": "incomplete", "missing": missing})
    ok = journal.save_answers()
    return {"ok": ok, "day": journal.day}


@app.get("/api/summary")
def api_summary(range: str = "week", format: str = "json", journal: Journal = Depends(get_journal)):
    try:
        range_ = SummaryRange(range)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown range: {range}")
    summary = journal.summary(range_)
    if format == "markdown":
        return PlainTextResponse(render_summary(summary))
    return summary.to_dict()


@app.get("/api/questions")
def api_questions(journal: Journal = Depends(get_journal)) -> list[dict[str, Any]]:
    return [q.to_dict() for q in journal.questions]


@app.post("/api/questions", status_code=201)
def api_add_question(payload: QuestionIn, journal: Journal = Depends(get_journal)) -> dict[str, Any]:
    errors = validate_question_text(payload.text)
    if errors:
        raise HTTPException(status_code=400, detail={"errors": errors})
    question = journal.add_question(payload.text.strip(), payload.type)
    return question.to_dict()


@app.put("/api/questions/{question_id}")
def api_update_question(question_id: str, payload: QuestionIn, journal: Journal = Depends(get_journal)) -> dict[str, Any]:
    errors = validate_question_text(payload.text)
    if errors:
        raise HTTPException(status_code=400, detail={"errors": errors})
    question = journal.questions.find(question_id)
    if question is None:
        raise HTTPException(status_code=404, detail=f"Question not found: {question_id}")
    journal.update_question(question_id, payload.text.strip(), payload.type)
    return question.to_dict()


@app.delete("/api/questions/{question_id}")
def api_delete_question(question_id: str, journal: Journal = Depends(get_journal)) -> dict[str, Any]:
    ids = journal.questions.ids()
    if question_id not in ids:
        raise HTTPException(status_code=404, detail=f"Question not found: {question_id}")
    journal.delete_questions([ids.index(question_id)])
    return {"ok": True, "deleted": question_id}


@app.post("/api/questions/move")
def api_move_questions(payload: MoveIn, journal: Journal = Depends(get_journal)) -> list[dict[str, Any]]:
    journal.move_questions(payload.from_indices, payload.to_index)
    return [q.to_dict() for q in journal.questions]


@app.get("/api/reminder")
def api_reminder(journal: Journal = Depends(get_journal)) -> dict[str, str]:
    return {"time": journal.reminder_time().strftime("%H:%M")}


@app.put("/api/reminder")
def api_set_reminder(payload: ReminderIn, journal: Journal = Depends(get_journal)) -> dict[str, Any]:
    try:
        at = time.fromisoformat(payload.time)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid time: {payload.time}")
    ok = journal.set_reminder_time(at.replace(second=0, microsecond=0))
    return {"ok": ok, "time": journal.reminder_time().strftime("%H:%M")}
