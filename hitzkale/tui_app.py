# tui_app.py - Hitzkale text UI
# -------------------------------------------------------
# Full-screen explorer wrapped around a QueryController:
#  - Enter runs the query typed in the search box
#  - results list on the left, grouped by initial for '*suffix' searches
#  - meaning of the highlighted result on the right
#  - clearing the box (or ctrl+l) returns to the idle screen
# Every search runs in its own worker; the controller drops completions that
# arrive after a newer query.
# -------------------------------------------------------

from __future__ import annotations

from typing import Callable, Optional

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Footer, Header, Input, OptionList, Static
from textual.widgets.option_list import Option

from hitzkale.core.controller import QueryController
from hitzkale.core.models import QueryKind, QueryState, QueryStatus
from hitzkale.presentation import (
    describe_result,
    group_by_initial,
    heading,
    split_meanings,
    status_line,
)
from hitzkale.utils.logger_utils import Log


class ResultList(OptionList):
    """Left-hand list of results. Option ids are MatchResult ids."""

    _shown: Optional[tuple] = None

    def update_from(self, state: QueryState) -> None:
        if state.status is QueryStatus.RESULTS and state.results == self._shown:
            # selection moved within the same result set
            if state.selected is not None:
                self.highlighted = self.get_option_index(state.selected.id)
            return
        self.clear_options()
        self._shown = state.results if state.status is QueryStatus.RESULTS else None
        if state.status is not QueryStatus.RESULTS:
            return
        if state.kind is QueryKind.SUFFIX:
            for letter, group in group_by_initial(state.results).items():
                self.add_option(Option(f"[b]{escape(letter)}[/b]", disabled=True))
                for r in group:
                    self.add_option(Option(f"  {escape(r.full_form)}", id=r.id))
        else:
            for r in state.results:
                self.add_option(Option(escape(describe_result(r, state.kind)), id=r.id))
        if state.selected is not None:
            self.highlighted = self.get_option_index(state.selected.id)


class MeaningPanel(Static):
    """Right-hand panel with the selected word and its meanings, one per line."""

    def update_from(self, state: QueryState) -> None:
        if state.selected is not None:
            meanings = split_meanings(state.selected.translation)
            body = "\n".join(escape(m) for m in meanings) or "[dim]No meaning available.[/dim]"
            self.update(f"[b]{escape(state.selected.full_form)}[/b]\n\n{body}")
        elif state.results:
            self.update("[dim i]Pick a form to see its meaning.[/dim i]")
        else:
            self.update("[dim i]No meaning to show.[/dim i]")


class StatusLine(Static):
    def update_from(self, state: QueryState) -> None:
        text = escape(status_line(state))
        if state.status is QueryStatus.FAILED:
            self.update(f"[red]{text}[/red]")
        elif state.status is QueryStatus.NO_RESULTS:
            self.update(f"[yellow]{text}[/yellow]")
        else:
            self.update(f"[dim]{text}[/dim]")


# Main Application -----------------------------------------------------------------
class HitzkaleApp(App):
    """
    UI events -> controller -> QueryState -> widgets.
    The app never keeps its own copy of results or selection; it re-renders
    from controller.state on every change.
    """
    CSS_PATH = "tui_style.css"
    TITLE = "Hitzkale"
    SUB_TITLE = "words and suffixes"

    BINDINGS = [
        ("ctrl+l", "clear_search", "Clear"),
        ("escape", "focus_search", "Search box"),
    ]

    def __init__(self, controller: QueryController, log: Optional[Log] = None):
        super().__init__()
        self.controller = controller
        self.event_log = log or Log()
        self._unsubscribe: Optional[Callable[[], None]] = None

    # UI --------------------------------------------------------------------
    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Basque word (e.g. 'etxe') or suffix (e.g. '*kide')", id="search")
        yield Static(id="heading")
        with Horizontal(id="main"):
            with Container(id="left"):
                yield ResultList(id="results")
            with Container(id="right"):
                yield MeaningPanel(id="meaning")
        yield StatusLine(id="status")
        yield Footer()

    def on_mount(self) -> None:
        self._unsubscribe = self.controller.subscribe(self.show_state)
        self.show_state(self.controller.state)
        self.query_one("#search", Input).focus()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()

    # Reactive rendering ---------------------------------------------------------
    def show_state(self, state: QueryState) -> None:
        self.query_one("#heading", Static).update(f"[b]{escape(heading(state))}[/b]")
        self.query_one(ResultList).update_from(state)
        self.query_one(MeaningPanel).update_from(state)
        self.query_one(StatusLine).update_from(state)

    # Input events ----------------------------------------------------------------
    def on_input_changed(self, event: Input.Changed) -> None:
        if not event.value.strip() and self.controller.state.status is not QueryStatus.IDLE:
            self.controller.clear()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.run_worker(self._search(event.value), group="search", exclusive=False)

    async def _search(self, raw: str) -> None:
        state = await self.controller.submit_query_async(raw)
        if state.raw_input == raw and not state.loading:
            self.event_log.info(f"tui query {raw!r} -> {state.status.value}")

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        if event.option.id is not None:
            self.controller.select_result(event.option.id)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id is not None:
            self.controller.select_result(event.option.id)

    # Actions ----------------------------------------------------------------------
    def action_clear_search(self) -> None:
        self.query_one("#search", Input).value = ""
        self.controller.clear()

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()


if __name__ == "__main__":
    from hitzkale.cli import build_controller
    from hitzkale.utils.config_manager import Config

    HitzkaleApp(build_controller(Config.from_env())).run()
