#!/usr/bin/env python3
"""Dots TUI: answer today's questions, review summaries, edit the list."""

from __future__ import annotations

import logging
from datetime import time

from textual import events, on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import (
    Button,
    ContentSwitcher,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Markdown,
    RadioButton,
    RadioSet,
    Select,
)

from dots import Journal, QuestionType, Summary, SummaryRange, render_summary
from dots.logconfig import configure_logging
from dots.workspace import init_workspace, log_path

logger = logging.getLogger(__name__)

DAY_CHECK_INTERVAL = 60


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
    padding: 0 1;
}

.question-text {
    margin: 1 0 0 0;
    padding: 0 1;
}

.free-text-input {
    margin: 0 0 0 2;
}

#save-btn {
    margin: 1 1;
}

#questions-table {
    height: 1fr;
}

.editor-row {
    height: auto;
    padding: 0 1;
}

.editor-row Input {
    width: 1fr;
}

#new-type {
    width: 20;
}

#reminder-input {
    width: 12;
}
"""


# ── Main app ───────────────────────────────────────────────────


class DotsApp(App):
    """Dots: daily questions in the terminal."""

    TITLE = "Dots"
    CSS = CSS

    BINDINGS = [
        Binding("1", "show_questions", "Questions"),
        Binding("2", "show_summary", "Summary"),
        Binding("3", "show_editor", "Edit"),
        Binding("r", "cycle_range", "Range"),
        Binding("ctrl+s", "save_answers", "Save"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, journal: Journal) -> None:
        super().__init__()
        self.journal = journal
        self._range = SummaryRange.WEEK
        self._generation = 0
        self._slots: dict[str, str] = {}

    def compose(self) -> ComposeResult:
        yield Header()
        with ContentSwitcher(initial="questions"):
            with VerticalScroll(id="questions"):
                yield Label("Today's Questions", id="questions-title", classes="section-title")
                yield Vertical(id="form")
                yield Button("Save", id="save-btn", variant="primary", disabled=True)
            with VerticalScroll(id="summary"):
                yield Label("Summary", id="summary-title", classes="section-title")
                yield Markdown(id="summary-md")
            with Vertical(id="editor"):
                yield Label("Edit Questions", classes="section-title")
                yield DataTable(id="questions-table", cursor_type="row")
                with Horizontal(classes="editor-row"):
                    yield Input(placeholder="Question text", id="new-text")
                    yield Select(
                        [(t.display_name, t.value) for t in QuestionType],
                        value=QuestionType.YES_NO.value,
                        allow_blank=False,
                        id="new-type",
                    )
                    yield Button("Add", id="add-btn", variant="primary")
                with Horizontal(classes="editor-row"):
                    yield Button("Update selected", id="update-btn")
                    yield Button("Delete", id="delete-btn", variant="error")
                    yield Button("Move up", id="up-btn")
                    yield Button("Move down", id="down-btn")
                with Horizontal(classes="editor-row"):
                    yield Label("Daily reminder (HH:MM)")
                    yield Input(id="reminder-input")
                    yield Button("Set", id="reminder-btn")
        yield Footer()

    async def on_mount(self) -> None:
        table = self.query_one("#questions-table", DataTable)
        table.add_columns("Question", "Type")
        self.query_one("#reminder-input", Input).value = self.journal.reminder_time().strftime("%H:%M")
        activation = self.journal.activate()
        await self._rebuild_form()
        self._rebuild_table()
        self._switch_to(activation.landing_view)
        self.set_interval(DAY_CHECK_INTERVAL, self._check_day)

    async def on_app_focus(self, event: events.AppFocus) -> None:
        await self._check_day()

    async def _check_day(self) -> None:
        if self.journal.check_for_day_change():
            await self._rebuild_form()
            self._switch_to("questions")
            self.notify(f"New day: {self.journal.day}", title="Dots")

    # ── Questions form ─────────────────────────────────────────

    async def _rebuild_form(self) -> None:
        """(Re)build the answer widgets from the journal's current day."""
        self._generation += 1
        gen = self._generation
        form = self.query_one("#form", Vertical)
        await form.remove_children()
        self._slots = {}
        widgets = []
        for i, q in enumerate(self.journal.questions):
            answer = self.journal.today.answers.get(q.id)
            widgets.append(Label(q.text, markup=False, classes="question-text"))
            if q.type is QuestionType.SLIDER:
                slot = f"sl-{gen}-{i}"
                value = answer.slider_value if answer else None
                widgets.append(Input(
                    value="" if value is None else str(int(value)),
                    placeholder="1-10",
                    type="integer",
                    id=slot,
                ))
                self._slots[slot] = q.id
                continue
            slot = f"yn-{gen}-{i}"
            yes_no = answer.yes_no_value if answer else None
            widgets.append(RadioSet(
                RadioButton("Yes", value=yes_no is True),
                RadioButton("No", value=yes_no is False),
                id=slot,
            ))
            self._slots[slot] = q.id
            if q.type is QuestionType.FREE_TEXT:
                slot = f"ft-{gen}-{i}"
                widgets.append(Input(
                    value=(answer.free_text_value or "") if answer else "",
                    placeholder="Please describe...",
                    id=slot,
                    classes="free-text-input",
                ))
                self._slots[slot] = q.id
        await form.mount_all(widgets)
        self.query_one("#questions-title", Label).update(f"Today's Questions ({self.journal.day})")
        self._update_save_button()

    def _update_save_button(self) -> None:
        self.query_one("#save-btn", Button).disabled = not self.journal.is_complete()

    @on(RadioSet.Changed)
    def _on_yes_no(self, event: RadioSet.Changed) -> None:
        qid = self._slots.get(event.radio_set.id or "")
        answer = self.journal.today.answers.get(qid or "")
        if answer is None:
            return
        value = event.index == 0
        if answer.yes_no_value is not value:
            self.journal.set_yes_no(answer.question_id, value)
        self._update_save_button()

    @on(Input.Changed)
    def _on_input(self, event: Input.Changed) -> None:
        slot = event.input.id or ""
        answer = self.journal.today.answers.get(self._slots.get(slot, ""))
        if answer is None:
            return
        if slot.startswith("sl-"):
            try:
                value = int(event.value)
            except ValueError:
                return
            if 1 <= value <= 10 and answer.slider_value != value:
                self.journal.set_slider(answer.question_id, value)
        elif slot.startswith("ft-"):
            if (answer.free_text_value or "") != event.value:
                self.journal.set_free_text(answer.question_id, event.value)
        self._update_save_button()

    async def action_save_answers(self) -> None:
        if self.journal.check_for_day_change():
            await self._rebuild_form()
            self.notify("The day changed; answers were reloaded for today.", severity="warning")
            return
        if not self.journal.is_complete():
            self.notify("Answer every question before saving.", severity="warning")
            return
        if self.journal.save_answers():
            self.notify("Your answers have been saved.", title="Saved!")
        else:
            self.notify("Could not write answers to disk.", title="Save failed", severity="error")
        self._switch_to("summary")

    @on(Button.Pressed, "#save-btn")
    async def _on_save(self, event: Button.Pressed) -> None:
        await self.action_save_answers()

    # ── Summary ────────────────────────────────────────────────

    def action_cycle_range(self) -> None:
        ranges = list(SummaryRange)
        self._range = ranges[(ranges.index(self._range) + 1) % len(ranges)]
        if self.query_one(ContentSwitcher).current == "summary":
            self._load_summary()

    @work(thread=True, exclusive=True)
    def _load_summary(self) -> None:
        summary = self.journal.summary(self._range)
        self.call_from_thread(self._show_summary, summary)

    def _show_summary(self, summary: Summary) -> None:
        self.query_one("#summary-title", Label).update(f"Summary: {self._range.title} (r to change)")
        self.query_one("#summary-md", Markdown).update(render_summary(summary))

    # ── Editor ─────────────────────────────────────────────────

    def _rebuild_table(self) -> None:
        table = self.query_one("#questions-table", DataTable)
        table.clear()
        for q in self.journal.questions:
            table.add_row(q.text, q.type.display_name)

    def _selected_index(self) -> int | None:
        table = self.query_one("#questions-table", DataTable)
        if table.row_count == 0:
            return None
        return table.cursor_row

    @on(DataTable.RowHighlighted, "#questions-table")
    def _on_row(self, event: DataTable.RowHighlighted) -> None:
        questions = self.journal.questions.questions
        if 0 <= event.cursor_row < len(questions):
            q = questions[event.cursor_row]
            self.query_one("#new-text", Input).value = q.text
            self.query_one("#new-type", Select).value = q.type.value

    async def _after_edit(self, select_row: int | None = None) -> None:
        self._rebuild_table()
        if select_row is not None:
            self.query_one("#questions-table", DataTable).move_cursor(row=select_row)
        await self._rebuild_form()

    def _editor_values(self) -> tuple[str, str] | None:
        text = self.query_one("#new-text", Input).value.strip()
        if not text:
            self.notify("Question text must not be empty.", severity="warning")
            return None
        return text, str(self.query_one("#new-type", Select).value)

    @on(Button.Pressed, "#add-btn")
    async def _on_add(self, event: Button.Pressed) -> None:
        values = self._editor_values()
        if values is None:
            return
        self.journal.add_question(*values)
        self.query_one("#new-text", Input).value = ""
        self.query_one("#new-type", Select).value = QuestionType.YES_NO.value
        await self._after_edit(len(self.journal.questions) - 1)

    @on(Button.Pressed, "#update-btn")
    async def _on_update(self, event: Button.Pressed) -> None:
        idx = self._selected_index()
        values = self._editor_values()
        if idx is None or values is None:
            return
        qid = self.journal.questions.questions[idx].id
        self.journal.update_question(qid, *values)
        await self._after_edit(idx)

    @on(Button.Pressed, "#delete-btn")
    async def _on_delete(self, event: Button.Pressed) -> None:
        idx = self._selected_index()
        if idx is None:
            return
        self.journal.delete_questions([idx])
        await self._after_edit(max(0, idx - 1))

    @on(Button.Pressed, "#up-btn")
    async def _on_up(self, event: Button.Pressed) -> None:
        idx = self._selected_index()
        if idx is None or idx == 0:
            return
        self.journal.move_questions([idx], idx - 1)
        await self._after_edit(idx - 1)

    @on(Button.Pressed, "#down-btn")
    async def _on_down(self, event: Button.Pressed) -> None:
        idx = self._selected_index()
        if idx is None or idx >= len(self.journal.questions) - 1:
            return
        self.journal.move_questions([idx], idx + 2)
        await self._after_edit(idx + 1)

    @on(Button.Pressed, "#reminder-btn")
    def _on_reminder(self, event: Button.Pressed) -> None:
        raw = self.query_one("#reminder-input", Input).value.strip()
        try:
            at = time.fromisoformat(raw)
        except ValueError:
            self.notify(f"Not a time: {raw!r}", severity="warning")
            return
        self.journal.set_reminder_time(at.replace(second=0, microsecond=0))
        self.notify(f"Daily reminder set for {at.strftime('%H:%M')}", title="Reminder")

    # ── View switching ─────────────────────────────────────────

    def _switch_to(self, view: str) -> None:
        self.query_one(ContentSwitcher).current = view
        if view == "summary":
            self._load_summary()

    def action_show_questions(self) -> None:
        self._switch_to("questions")

    def action_show_summary(self) -> None:
        self._switch_to("summary")

    def action_show_editor(self) -> None:
        self._switch_to("editor")


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = init_workspace()
    configure_logging(log_path(root))
    app = DotsApp(Journal.open(root))
    app.run()


if __name__ == "__main__":
    main()
