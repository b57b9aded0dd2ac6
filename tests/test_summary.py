"""Tests for dots/summary.py — aggregation over saved days."""

import pytest

from dots.answers import empty_answers
from dots.clock import answers_key
from dots.codec import encode_answers
from dots.models import Answer, Question, QuestionType
from dots.store import MemoryStore
from dots.summary import NO_DETAILS, SummaryRange, aggregate, range_days

AS_OF = "2026-02-11"
Q_YES = Question(id="q-yes", text="Exercise?", type=QuestionType.YES_NO)
Q_SLIDER = Question(id="q-slider", text="Energy", type=QuestionType.SLIDER)
Q_TEXT = Question(id="q-text", text="Highlight?", type=QuestionType.FREE_TEXT)


def _put_day(store, day, **values):
    """values maps question id -> dict of Answer field overrides."""
    answers = empty_answers([Question(id=qid, text="", type=QuestionType.YES_NO) for qid in values], day)
    for qid, fields in values.items():
        for name, value in fields.items():
            setattr(answers[qid], name, value)
    store.set(answers_key(day), encode_answers(answers))


def test_range_days():
    assert range_days(SummaryRange.TODAY, AS_OF) == [AS_OF]
    week = range_days("week", AS_OF)
    assert len(week) == 7
    assert week[0] == AS_OF
    assert week[-1] == "2026-02-05"
    month = range_days(SummaryRange.MONTH, AS_OF)
    assert len(month) == 30
    assert month[-1] == "2026-01-13"


def test_unknown_range():
    with pytest.raises(ValueError):
        range_days("year", AS_OF)


def test_week_yes_no_counts():
    store = MemoryStore()
    _put_day(store, "2026-02-11", **{"q-yes": {"yes_no_value": True}})
    _put_day(store, "2026-02-09", **{"q-yes": {"yes_no_value": True}})
    _put_day(store, "2026-02-06", **{"q-yes": {"yes_no_value": False}})
    summary = aggregate(store, SummaryRange.WEEK, [Q_YES], AS_OF)
    stats = summary.questions[0].yes_no
    assert stats.yes_count == 2
    assert stats.no_count == 1
    assert stats.total == 3
    assert stats.yes_percent == pytest.approx(2 / 3)
    assert summary.days == ["2026-02-11", "2026-02-09", "2026-02-06"]


def test_days_outside_window_ignored():
    store = MemoryStore()
    _put_day(store, "2026-02-04", **{"q-yes": {"yes_no_value": True}})
    _put_day(store, "2026-02-12", **{"q-yes": {"yes_no_value": True}})
    summary = aggregate(store, SummaryRange.WEEK, [Q_YES], AS_OF)
    assert summary.questions[0].yes_no.total == 0


def test_slider_mean():
    store = MemoryStore()
    _put_day(store, "2026-02-10", **{"q-slider": {"slider_value": 4.0}})
    _put_day(store, "2026-02-08", **{"q-slider": {"slider_value": 8.0}})
    _put_day(store, "2026-02-07", **{"q-slider": {}})
    stats = aggregate(store, SummaryRange.WEEK, [Q_SLIDER], AS_OF).questions[0].slider
    assert stats.mean == 6.0
    assert stats.values == [4.0, 8.0]


def test_empty_month():
    summary = aggregate(MemoryStore(), SummaryRange.MONTH, [Q_YES, Q_SLIDER, Q_TEXT], AS_OF)
    yes_no, slider, text = (q for q in summary.questions)
    assert yes_no.yes_no.total == 0
    assert yes_no.yes_no.yes_percent == 0
    assert slider.slider.mean is None
    assert text.free_text.responses == []
    assert summary.days == []


def test_free_text_gated_on_yes_and_ordered_recent_first():
    store = MemoryStore()
    _put_day(store, "2026-02-09", **{"q-text": {"yes_no_value": True, "free_text_value": "older"}})
    _put_day(store, "2026-02-10", **{"q-text": {"yes_no_value": False, "free_text_value": "hidden"}})
    _put_day(store, "2026-02-11", **{"q-text": {"yes_no_value": True, "free_text_value": ""}})
    _put_day(store, "2026-02-08", **{"q-text": {"yes_no_value": True}})
    stats = aggregate(store, SummaryRange.WEEK, [Q_TEXT], AS_OF).questions[0].free_text
    assert stats.responses == [NO_DETAILS, "older", NO_DETAILS]


def test_corrupt_days_omitted():
    store = MemoryStore()
    _put_day(store, "2026-02-10", **{"q-yes": {"yes_no_value": True}})
    store.set(answers_key("2026-02-09"), b"not json")
    summary = aggregate(store, SummaryRange.WEEK, [Q_YES], AS_OF)
    assert summary.days == ["2026-02-10"]
    assert summary.questions[0].yes_no.total == 1


def test_orphaned_and_retyped_questions():
    store = MemoryStore()
    _put_day(store, "2026-02-10", **{
        "deleted-question": {"yes_no_value": True},
        "q-slider": {"yes_no_value": True},
    })
    summary = aggregate(store, SummaryRange.WEEK, [Q_YES, Q_SLIDER], AS_OF)
    assert summary.questions[0].yes_no.total == 0
    assert summary.questions[1].slider.mean is None


def test_unsaved_today_not_counted(mixed_journal):
    q_yes = mixed_journal.questions.questions[0]
    mixed_journal.set_yes_no(q_yes.id, True)
    summary = mixed_journal.summary(SummaryRange.TODAY)
    assert summary.questions[0].yes_no.total == 0
    mixed_journal.save_answers()
    summary = mixed_journal.summary(SummaryRange.TODAY)
    assert summary.questions[0].yes_no.yes_count == 1


def test_summary_to_dict():
    store = MemoryStore()
    _put_day(store, "2026-02-11", **{"q-yes": {"yes_no_value": True}, "q-slider": {"slider_value": 3.0}})
    d = aggregate(store, "today", [Q_YES, Q_SLIDER], AS_OF).to_dict()
    assert d["range"] == "today"
    assert d["asOf"] == AS_OF
    assert d["questions"][0]["yesNo"] == {"yesCount": 1, "noCount": 0, "total": 1, "yesPercent": 1.0}
    assert d["questions"][1]["slider"] == {"count": 1, "mean": 3.0}


def test_answer_records_are_matched_by_question():
    # Answer objects carry their own questionID; the map key is what is matched.
    store = MemoryStore()
    answers = {"q-yes": Answer(id="a", question_id="q-yes", day=AS_OF, yes_no_value=False)}
    store.set(answers_key(AS_OF), encode_answers(answers))
    stats = aggregate(store, "today", [Q_YES], AS_OF).questions[0].yes_no
    assert (stats.yes_count, stats.no_count) == (0, 1)
