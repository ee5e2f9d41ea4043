"""Typer CLI application for inspecting and driving components."""

import json
import logging
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tui_adapters.components.base import BaseComponent, FocusableComponent
from tui_adapters.components.registry import default_registry
from tui_adapters.core.ansi_text import fit_lines
from tui_adapters.core.config import DEFAULT_THEME, PLAIN_THEME, ConfigurationError, load_props
from tui_adapters.core.dispatch import BubbleSignal
from tui_adapters.core.input import InputReader
from tui_adapters.core.terminal import Terminal
from tui_adapters.harness import ComponentHarness, Delivery
from tui_adapters.widgets.base import Rect

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def split_keys(keys: str) -> list[str]:
    """Split ``"h,i,enter"`` into key strings. Use ``comma`` for a literal comma."""
    return [k for k in keys.split(",") if k != ""]


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="tui-adapters",
        help="Inspect and drive terminal UI component adapters.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()
    err_console = Console(stderr=True)

    def fail(message: str) -> NoReturn:
        err_console.print(f"[red]{escape(message)}[/]")
        raise typer.Exit(1)

    def build(kind: str, props: Optional[str], component_id: str, plain: bool) -> BaseComponent:
        try:
            return default_registry.create(
                kind,
                component_id,
                load_props(props),
                PLAIN_THEME if plain else DEFAULT_THEME,
            )
        except ConfigurationError as e:
            fail(str(e))

    @app.callback()
    def main(
        log_level: Annotated[str, typer.Option("--log-level", "-l", help="Logging level")] = "WARNING",
    ) -> None:
        """Inspect and drive terminal UI component adapters."""
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            fail(f"Unknown log level: {log_level}")
        logging.basicConfig(level=level, format=LOG_FORMAT)

    @app.command()
    def kinds() -> None:
        """List registered component kinds."""
        table = Table(title="Component kinds")
        table.add_column("Kind", style="bold cyan")
        table.add_column("Class")
        table.add_column("Focusable")
        table.add_column("Special keys", style="dim")
        for kind in default_registry.kinds():
            component_class = default_registry.component_class(kind)
            focusable = component_class is not None and issubclass(component_class, FocusableComponent)
            special = ", ".join(component_class.SPECIAL_KEYS) if component_class else ""
            table.add_row(
                kind,
                component_class.__name__ if component_class else "(custom)",
                "yes" if focusable else "no",
                special,
            )
        console.print(table)

    @app.command()
    def bindings(
        kind: Annotated[str, typer.Argument(help="Component kind")],
        props: Annotated[Optional[str], typer.Option("--props", "-p", help="Props as JSON or a JSON file")] = None,
        width: Annotated[int, typer.Option("--width", "-w", help="Help text width")] = 60,
    ) -> None:
        """Show the key bindings a component would use."""
        component = build(kind, props, kind, plain=True)
        table = component.binding_table
        if not table:
            console.print(f"[dim]No bindings configured for {kind}[/]")
            return
        console.print(f"[bold cyan]Bindings for {kind}[/]")
        for line in table.generate_help_text(width):
            console.print(line, markup=False, highlight=False)
        hints = table.get_status_bar_hints()
        if hints:
            console.print()
            console.print("  ".join(f"[bold]{key}[/] {desc}" for key, desc in hints))

    @app.command()
    def replay(
        kind: Annotated[str, typer.Argument(help="Component kind")],
        keys: Annotated[str, typer.Option("--keys", "-k", help="Comma separated key strings, e.g. 'h,i,enter'")] = "",
        props: Annotated[Optional[str], typer.Option("--props", "-p", help="Props as JSON or a JSON file")] = None,
        component_id: Annotated[str, typer.Option("--id", help="Component id")] = "component",
        unfocused: Annotated[bool, typer.Option("--unfocused", help="Do not focus the component first")] = False,
        show_view: Annotated[bool, typer.Option("--view", "-v", help="Print the final view")] = False,
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """Replay key presses through a component and report what happened."""
        component = build(kind, props, component_id, plain=True)
        harness = ComponentHarness(component)
        harness.start()
        if not unfocused:
            harness.focus()
        try:
            deliveries = harness.replay_keys(split_keys(keys))
        except ValueError as e:
            fail(str(e))

        if json_output:
            data = {
                "kind": kind,
                "id": component_id,
                "deliveries": [d.to_dict() for d in deliveries],
                "actions": [
                    {"source": a.source_id, "process": a.action.process, "method": a.action.method}
                    for a in harness.actions
                ],
                "state": _jsonable(component.get_state_changes()[0]),
            }
            if show_view:
                data["view"] = component.view()
            print(json.dumps(data, indent=2, default=str))
            return

        for delivery in deliveries:
            _print_delivery(console, delivery)
        if harness.actions:
            console.print(f"[bold]Actions requested:[/] {len(harness.actions)}")
        if show_view:
            console.print()
            console.print(component.view(), markup=False, highlight=False)

    @app.command(name="try")
    def try_component(
        kind: Annotated[str, typer.Argument(help="Component kind")],
        props: Annotated[Optional[str], typer.Option("--props", "-p", help="Props as JSON or a JSON file")] = None,
    ) -> None:
        """Run a component interactively. Ctrl+C or Ctrl+Q quits."""
        component = build(kind, props, kind, plain=False)
        run_interactive(component)

    return app


def _jsonable(value: object) -> object:
    return json.loads(json.dumps(value, default=str))


def _print_delivery(console: Console, delivery: Delivery) -> None:
    color = "green" if delivery.signal is BubbleSignal.HANDLED else "yellow"
    console.print(f"[bold]{escape(str(delivery.message))}[/] -> [{color}]{delivery.signal.name}[/]", highlight=False)
    for event in delivery.notifications:
        payload = json.dumps(event.payload, default=str)
        console.print(f"    [cyan]{event.name}[/] {escape(payload)}", highlight=False)


def run_interactive(component: BaseComponent) -> None:
    """Event loop: paint, read one key (or time out), deliver pending ticks."""
    harness = ComponentHarness(component, quit_keys=("ctrl+c", "ctrl+q"))
    harness.start()
    harness.focus()
    reader = InputReader()
    last_events: list[str] = []

    with Terminal.managed_mode():
        while not harness.quit_requested:
            size = Terminal.size()
            body = component.render(Rect(0, 0, size.cols, max(1, size.rows - 2)))
            status = f" {component.kind}#{component.id}  focused={getattr(component, 'focused', '-')}  " + " ".join(last_events[-4:])
            Terminal.paint(fit_lines(body, size.cols, size.rows - 2) + ["", status[:size.cols]])

            event = reader.read(timeout=0.1)
            if event is not None:
                delivery = harness.deliver(event)
                last_events.extend(delivery.event_names)
            for delivery in harness.drain(limit=len(harness.pending)):
                last_events.extend(n for n in delivery.event_names if n != "SPINNER_TICK")

    harness.close()
