"""
cli.py - command line front end for the suffix explorer
Features:
- One-shot searches (`hitzkale search etxe`, `hitzkale search '*kide'`)
- Interactive loop with slash commands and numbered selection
- Textual UI launcher and the offline CSV importer
- Uses Rich for tables and panels

Usage:
    hitzkale search etxe
    hitzkale search '*tegi' --json
    hitzkale repl
    hitzkale tui
    hitzkale import-csv new_words.csv --data hitzkale/data/words.json
"""

from __future__ import annotations

import argparse
import json
import shlex
import sys
import time
from dataclasses import asdict
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text
from rich.markup import escape
from rich import box

from hitzkale import __version__
from hitzkale.core.controller import QueryController
from hitzkale.core.dictionary import DictionaryStore
from hitzkale.core.errors import DatasetImportError, DictionaryLoadError
from hitzkale.core.models import MatchResult, QueryKind, QueryState, QueryStatus
from hitzkale.importer import import_csv
from hitzkale.presentation import (
    describe_result,
    group_by_initial,
    heading,
    split_meanings,
    status_line,
)
from hitzkale.utils.config_manager import Config
from hitzkale.utils.logger_utils import Log
from hitzkale.utils.metrics_tracker import Metrics

console = Console()


def build_store(cfg: Config) -> DictionaryStore:
    """Bundled data unless the config names its own files."""
    with Log.time_block("load dictionary"):
        if cfg.data_files:
            return DictionaryStore.from_sources(*cfg.data_files)
        return DictionaryStore.load_default()


def build_controller(cfg: Config, store: Optional[DictionaryStore] = None) -> QueryController:
    return QueryController(
        store if store is not None else build_store(cfg),
        suffixes=cfg.suffixes,
        sentinel=cfg.sentinel,
        latency=cfg.latency,
    )


# DISPLAY -------------------------------------------------------------------------------
def display_order(state: QueryState) -> List[MatchResult]:
    """Results in the order they are listed on screen (grouped for suffix searches)."""
    if state.kind is QueryKind.SUFFIX:
        return [r for group in group_by_initial(state.results).values() for r in group]
    return list(state.results)


def render_state(state: QueryState, out: Console = console, limit: int = 50) -> None:
    if state.status is QueryStatus.FAILED:
        out.print(f"[red]{escape(state.error or '')}[/red]")
        return
    if state.status is QueryStatus.NO_RESULTS:
        out.print(f"[yellow]{escape(state.error or '')}[/yellow]")
        return
    if state.status is not QueryStatus.RESULTS:
        out.print(f"[dim]{escape(status_line(state))}[/dim]")
        return

    title = heading(state)
    table = Table(title=escape(title), box=box.SIMPLE, show_edge=False)
    table.add_column("#", justify="right", style="cyan")
    if state.kind is QueryKind.SUFFIX:
        table.add_column("", style="bold magenta")
        table.add_column("Word", style="bold")
        n = 0
        for letter, group in group_by_initial(state.results).items():
            if n >= limit:
                break
            for i, r in enumerate(group[:limit - n]):
                marker = "green" if r == state.selected else ""
                table.add_row(str(n + 1), escape(letter) if i == 0 else "", Text(r.full_form, style=marker))
                n += 1
    else:
        table.add_column("Suffix", style="bold")
        for n, r in enumerate(state.results[:limit], 1):
            marker = "green" if r == state.selected else ""
            table.add_row(str(n), Text(describe_result(r, state.kind), style=marker))
    out.print(table)
    if len(state.results) > limit:
        out.print(f"[dim]... {len(state.results) - limit} more[/dim]")
    out.print(f"[dim]{escape(status_line(state))}[/dim]")
    render_selected(state, out)


def render_selected(state: QueryState, out: Console = console) -> None:
    if state.selected is None:
        return
    meanings = split_meanings(state.selected.translation)
    body = "\n".join(escape(m) for m in meanings) if meanings else "[dim]No meaning available.[/dim]"
    out.print(Panel(body, title=escape(state.selected.full_form), border_style="cyan", expand=False))


def state_to_dict(state: QueryState) -> dict:
    return {
        "status": state.status.value,
        "kind": state.kind.value,
        "term": state.active_term,
        "error": state.error,
        "selected": state.selected.id if state.selected else None,
        "results": [asdict(r) for r in state.results],
    }


class ExplorerREPL:
    """Interactive loop: anything typed is a query, slash commands drive the rest."""

    def __init__(self, controller: QueryController, cfg: Config, metrics: Optional[Metrics] = None,
                 out: Console = console, log: Optional[Log] = None):
        self.controller = controller
        self.cfg = cfg
        self.metrics = metrics or Metrics()
        self.out = out
        self.log = log or Log()
        self.running = True

    def run(self):
        self.out.rule("[bold magenta]Hitzkale - words and suffixes[/bold magenta]")
        self.out.print(f"[cyan]{escape(status_line(self.controller.state))}[/cyan]")
        self.out.print("Commands: /select N /clear /suffixes /stats /config /help /quit\n")

        while self.running:
            try:
                line = Prompt.ask("[green]Search[/green]", default="", console=self.out)
            except (EOFError, KeyboardInterrupt):
                self.running = False
                break
            self.handle_line(line)
        self.out.rule("[red]Agur[/red]")

    def handle_line(self, line: str) -> None:
        if line.strip().startswith("/"):
            self.handle_command(line.strip())
            return
        if not line.strip():
            self.controller.clear()
            return
        self.search(line)

    # CORE INPUT PROCESSING ---------------------------------------------------------------
    def search(self, raw: str) -> QueryState:
        t0 = time.perf_counter()
        state = self.controller.submit_query(raw)
        self.metrics.record_query(state, time.perf_counter() - t0)
        self.log.info(f"query {raw!r} -> {state.status.value} ({len(state.results)} results)")
        render_state(state, self.out, self.cfg.max_display)
        return state

    # COMMAND HANDLING -----------------------------------------------------------
    def handle_command(self, line: str):
        try:
            p = shlex.split(line)
        except ValueError as e:
            self.out.print(f"[red]Bad command:[/red] {escape(str(e))}")
            return
        if not p:
            return
        c = p[0].lower()

        if c in ("/q", "/quit", "/exit"):
            self.running = False
            return

        if c == "/help":
            self.out.print("Type a word ('etxe') or a suffix ('*kide') to search.")
            self.out.print("cmds: /select N, /clear, /suffixes, /stats, /config \\[key val], /quit")
            return

        if c == "/clear":
            self.controller.clear()
            self.out.print("[yellow]Cleared.[/yellow]")
            return

        if c == "/select":
            self._select(p[1:])
            return

        if c == "/suffixes":
            self.out.print("Recognized suffixes: " + ", ".join(self.controller.suffixes))
            return

        if c == "/stats":
            self.out.print(self.metrics.table())
            self.out.print(f"[dim]{len(self.controller.entries)} dictionary entries[/dim]")
            return

        if c == "/config":
            if len(p) == 1:
                for k, v in self.cfg.items():
                    self.out.print(f"{k:15} = {v}")
            elif len(p) == 3:
                try:
                    self.cfg.set(p[1], p[2])
                    self.out.print(f"[green]{p[1]}[/green] = {self.cfg.get(p[1])} (applies on restart)")
                except (KeyError, ValueError) as e:
                    self.out.print(f"[red]{escape(str(e))}[/red]")
            else:
                self.out.print("usage: /config \\[key val]")
            return

        self.out.print(f"[red]Unknown command:[/red] {escape(c)}")

    def _select(self, args: List[str]) -> None:
        state = self.controller.state
        if state.status is not QueryStatus.RESULTS:
            self.out.print("[dim](nothing to select)[/dim]")
            return
        order = display_order(state)
        if len(args) != 1 or not args[0].isdigit() or not 1 <= int(args[0]) <= len(order):
            self.out.print(f"usage: /select N  (1-{len(order)})")
            return
        self.controller.select_result(order[int(args[0]) - 1].id)
        render_selected(self.controller.state, self.out)


# ENTRY POINT ---------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hitzkale",
        description="Explore Basque words by base (etxe -> etxe+kide) and by suffix (*kide).",
    )
    parser.add_argument("--version", action="store_true", help="print version and exit")
    parser.add_argument("--config", help="JSON config file (default: $HITZKALE_CONFIG)")
    parser.add_argument("--log", help="log file path")
    sub = parser.add_subparsers(dest="command")

    p_search = sub.add_parser("search", help="run one query and print the results")
    p_search.add_argument("query", help="a word, or '*suffix'")
    p_search.add_argument("--json", action="store_true", help="machine-readable output")
    p_search.add_argument("--select", type=int, default=None, metavar="N",
                          help="show the meaning of result N instead of the first")

    sub.add_parser("repl", help="interactive search loop")
    sub.add_parser("tui", help="full-screen text UI")

    p_imp = sub.add_parser("import-csv", help="append CSV rows to a JSON word list")
    p_imp.add_argument("csv", help="CSV export with basque/spanish columns")
    p_imp.add_argument("--data", required=True, help="JSON data file to extend")
    p_imp.add_argument("--word-column", default="basque")
    p_imp.add_argument("--translation-column", default="spanish")
    p_imp.add_argument("--dry-run", action="store_true")
    return parser


def _cmd_search(args, controller: QueryController, cfg: Config, log: Log) -> int:
    state = controller.submit_query(args.query)
    log.info(f"search {args.query!r} -> {state.status.value}")
    if args.select is not None and state.status is QueryStatus.RESULTS:
        order = display_order(state)
        if not 1 <= args.select <= len(order):
            console.print(f"[red]--select must be between 1 and {len(order)}[/red]")
            return 2
        controller.select_result(order[args.select - 1].id)
        state = controller.state
    if args.json:
        print(json.dumps(state_to_dict(state), ensure_ascii=False, indent=2))
    else:
        render_state(state, console, cfg.max_display)
    return 0 if state.status is QueryStatus.RESULTS else 1


def _cmd_import(args, log: Log) -> int:
    try:
        added = import_csv(args.csv, args.data, args.word_column, args.translation_column, args.dry_run)
    except DatasetImportError as e:
        console.print(f"[red]Import failed:[/red] {escape(str(e))}")
        log.error(f"import failed: {e}")
        return 1
    if not added:
        console.print("[yellow]No new words to add.[/yellow]")
        return 0
    verb = "would be added" if args.dry_run else "added"
    console.print(f"[green]{len(added)} word(s) {verb} to {args.data}.[/green]")
    log.info(f"imported {len(added)} entries into {args.data}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"hitzkale {__version__}")
        return 0
    if not args.command:
        parser.print_help()
        return 1

    log = Log(path=args.log)
    if args.command == "import-csv":
        return _cmd_import(args, log)

    cfg = Config(args.config) if args.config else Config.from_env()
    try:
        controller = build_controller(cfg)
    except DictionaryLoadError as e:
        console.print(f"[red]Cannot load dictionary:[/red] {escape(str(e))}")
        log.error(f"dictionary load failed: {e}")
        return 1

    if args.command == "search":
        return _cmd_search(args, controller, cfg, log)
    if args.command == "repl":
        ExplorerREPL(controller, cfg, log=log).run()
        return 0
    if args.command == "tui":
        from hitzkale.tui_app import HitzkaleApp
        HitzkaleApp(controller).run()
        return 0
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
