"""Tests for dots/models.py — serialization and completeness rules."""

import pytest

from dots.models import Answer, Question, QuestionType, Settings, SliderStats, YesNoStats
from datetime import time


def test_question_round_trip():
    q = Question(id="q1", text="Slept well?", type=QuestionType.SLIDER)
    d = q.to_dict()
    assert d == {"id": "q1", "text": "Slept well?", "type": "slider"}
    assert Question.from_dict(d) == q


def test_question_unknown_type_raises():
    with pytest.raises(ValueError):
        Question.from_dict({"id": "q1", "text": "x", "type": "multipleChoice"})


def test_answer_uses_camel_case_keys():
    a = Answer(id="a1", question_id="q1", day="2026-02-11", yes_no_value=True)
    d = a.to_dict()
    assert d["questionID"] == "q1"
    assert d["yesNoValue"] is True
    assert d["sliderValue"] is None
    assert d["freeTextValue"] is None


def test_answer_from_dict_rejects_bad_values():
    base = {"id": "a1", "questionID": "q1", "day": "2026-02-11"}
    with pytest.raises(ValueError):
        Answer.from_dict({**base, "yesNoValue": "yes"})
    with pytest.raises(ValueError):
        Answer.from_dict({**base, "sliderValue": "7"})
    with pytest.raises(KeyError):
        Answer.from_dict({"id": "a1"})


def test_answer_slider_int_becomes_float():
    a = Answer.from_dict({"id": "a1", "questionID": "q1", "day": "d", "sliderValue": 7})
    assert a.slider_value == 7.0


def test_is_answered_for_free_text_uses_yes_no_flag():
    a = Answer(id="a1", question_id="q1", day="d", free_text_value="went for a run")
    assert a.is_answered_for(QuestionType.FREE_TEXT) is False
    a.yes_no_value = False
    assert a.is_answered_for(QuestionType.FREE_TEXT) is True


def test_is_answered_for_slider_ignores_yes_no():
    a = Answer(id="a1", question_id="q1", day="d", yes_no_value=True)
    assert a.is_answered_for(QuestionType.SLIDER) is False
    a.slider_value = 3
    assert a.is_answered_for(QuestionType.SLIDER) is True


def test_yes_no_stats_zero_total():
    s = YesNoStats()
    assert s.total == 0
    assert s.yes_percent == 0.0


def test_slider_stats_empty_mean_is_none():
    assert SliderStats().mean is None
    assert SliderStats(values=[4.0, 8.0]).mean == 6.0


def test_settings_from_dict():
    s = Settings.from_dict({"timezone": "Europe/Berlin", "reminder_time": "07:15"})
    assert s.timezone == "Europe/Berlin"
    assert s.reminder_time == time(7, 15)


def test_settings_sexagesimal_reminder():
    # yaml.safe_load("reminder_time: 22:00") gives 1320
    assert Settings.from_dict({"reminder_time": 1320}).reminder_time == time(22, 0)


def test_settings_defaults():
    s = Settings.from_dict({})
    assert s.timezone is None
    assert s.reminder_time == time(22, 0)
