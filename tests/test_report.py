"""Tests for dots/report.py — markdown rendering of summaries."""

from dots.models import (
    FreeTextStats,
    Question,
    QuestionSummary,
    QuestionType,
    SliderStats,
    Summary,
    YesNoStats,
)
from dots.report import NO_RESPONSES, NO_SLIDER_DATA, describe_question, render_summary


def _q(qtype, text="Q?"):
    return Question(id="q1", text=text, type=qtype)


def test_yes_no_line():
    qs = QuestionSummary(question=_q(QuestionType.YES_NO), yes_no=YesNoStats(yes_count=2, no_count=1))
    assert describe_question(qs) == ["Yes: 2  No: 1  (67% yes)"]


def test_yes_no_empty():
    qs = QuestionSummary(question=_q(QuestionType.YES_NO), yes_no=YesNoStats())
    assert describe_question(qs) == ["Yes: 0  No: 0  (0% yes)"]


def test_slider_lines():
    empty = QuestionSummary(question=_q(QuestionType.SLIDER), slider=SliderStats())
    assert describe_question(empty) == [NO_SLIDER_DATA]
    filled = QuestionSummary(question=_q(QuestionType.SLIDER), slider=SliderStats(values=[4.0, 7.0]))
    assert describe_question(filled) == ["Average: 5.5"]


def test_free_text_lines():
    empty = QuestionSummary(question=_q(QuestionType.FREE_TEXT), free_text=FreeTextStats())
    assert describe_question(empty) == [NO_RESPONSES]
    filled = QuestionSummary(
        question=_q(QuestionType.FREE_TEXT),
        free_text=FreeTextStats(responses=["went for a run", "(No details provided)"]),
    )
    assert describe_question(filled) == ["- went for a run", "- (No details provided)"]


def test_render_summary():
    summary = Summary(
        range="week",
        as_of="2026-02-11",
        days=["2026-02-11", "2026-02-10"],
        questions=[
            QuestionSummary(question=_q(QuestionType.YES_NO, "Exercise?"), yes_no=YesNoStats(yes_count=1, no_count=1)),
        ],
    )
    text = render_summary(summary)
    assert text.startswith("## Week (as of 2026-02-11)\n")
    assert "- Days recorded: 2" in text
    assert "**Exercise?**" in text
    assert "Yes: 1  No: 1  (50% yes)" in text
    assert text.endswith("\n")


def test_render_no_questions():
    text = render_summary(Summary(range="today", as_of="2026-02-11"))
    assert "(no questions)" in text


def test_render_from_journal(mixed_journal):
    for q in mixed_journal.questions:
        if q.type is QuestionType.SLIDER:
            mixed_journal.set_slider(q.id, 8)
        else:
            mixed_journal.set_yes_no(q.id, True)
    mixed_journal.save_answers()
    text = render_summary(mixed_journal.summary("today"))
    assert "Average: 8.0" in text
    assert "- (No details provided)" in text
