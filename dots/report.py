"""Markdown rendering of summaries for Dots."""

from __future__ import annotations

from dots.models import QuestionSummary, Summary

NO_SLIDER_DATA = "No data yet."
NO_RESPONSES = "No responses yet."


def describe_question(qs: QuestionSummary) -> list[str]:
    """Body lines for one question's statistics."""
    if qs.yes_no is not None:
        s = qs.yes_no
        return [f"Yes: {s.yes_count}  No: {s.no_count}  ({s.yes_percent:.0%} yes)"]
    if qs.slider is not None:
        mean = qs.slider.mean
        if mean is None:
            return [NO_SLIDER_DATA]
        return [f"Average: {mean:.1f}"]
    if qs.free_text is not None and qs.free_text.responses:
        return [f"- {text}" for text in qs.free_text.responses]
    return [NO_RESPONSES]


def render_summary(summary: Summary) -> str:
    """Build the markdown text for a summary view."""
    title = summary.range.capitalize() or "Summary"
    days = len(summary.days)
    lines = [
        f"## {title} (as of {summary.as_of})",
        f"- Days recorded: {days}",
        "",
    ]
    if not summary.questions:
        lines.append("(no questions)")
    for qs in summary.questions:
        lines += [f"**{qs.question.text}**", ""]
        lines += describe_question(qs)
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
