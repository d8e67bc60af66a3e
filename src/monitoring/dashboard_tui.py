# rich-based TUI dashboard
#src/monitoring/dashboard_tui.py
"""
TUI dashboard for the pathfinding engine.

A lightweight terminal UI (using `rich`) that subscribes to the monitoring
EventBus and renders:

- Search totals:
    - searches started
    - paths found / not found (per reason)

- Last search:
    - start and target cells
    - cost, waypoint count, expanded cells
    - failure reason (if any)

- Grid activity:
    - walkability edits
    - boundary violations (last offending cell)

This runs entirely offline. No web server, no external services.
"""

from __future__ import annotations

from typing import Any, Dict

from rich.console import Console
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .bus import EventBus
from .events import EventType, MonitoringEvent


# ============================================================
# TUI Dashboard
# ============================================================

class SearchDashboard:
    """
    Terminal dashboard bound to a monitoring.EventBus.

    It consumes MonitoringEvents and keeps a small in-memory state
    representation, which print_snapshot renders via rich.
    """

    def __init__(self, bus: EventBus, console: Console | None = None) -> None:
        self._bus = bus
        self._console = console or Console()

        self._state: Dict[str, Any] = {
            "searches": 0,
            "found": 0,
            "not_found": {},           # {reason: count}
            "last_search": None,       # payload of the last PATH_* event
            "last_success": None,
            "walkability_edits": 0,
            "blocked_cells": set(),
            "boundary_violations": 0,
            "last_violation": None,
        }

        self._bus.subscribe(self._on_event)

    @property
    def state(self) -> Dict[str, Any]:
        return self._state

    # --------------------------------------------------------
    # Event handler
    # --------------------------------------------------------

    def _on_event(self, event: MonitoringEvent) -> None:
        """
        Update dashboard state based on a MonitoringEvent.
        This should be cheap and non-blocking.
        """
        et = event.event_type

        if et == EventType.SEARCH_STARTED:
            self._state["searches"] += 1

        elif et == EventType.PATH_FOUND:
            self._state["found"] += 1
            self._state["last_search"] = dict(event.payload)
            self._state["last_success"] = True

        elif et == EventType.PATH_NOT_FOUND:
            reason = event.payload.get("reason", "unknown")
            counts = self._state["not_found"]
            counts[reason] = counts.get(reason, 0) + 1
            self._state["last_search"] = dict(event.payload)
            self._state["last_success"] = False

        elif et == EventType.WALKABILITY_CHANGED:
            self._state["walkability_edits"] += 1
            cell = tuple(event.payload.get("cell") or ())
            if event.payload.get("walkable"):
                self._state["blocked_cells"].discard(cell)
            else:
                self._state["blocked_cells"].add(cell)

        elif et == EventType.BOUNDARY_VIOLATION:
            self._state["boundary_violations"] += 1
            self._state["last_violation"] = dict(event.payload)

    # --------------------------------------------------------
    # Rendering helpers
    # --------------------------------------------------------

    def _render_totals_panel(self) -> Panel:
        """
        Top: search counters.
        """
        not_found = self._state["not_found"]
        failed = sum(not_found.values())

        txt = Text()
        txt.append("Searches: ", style="bold")
        txt.append(f"{self._state['searches']}   ")
        txt.append("Found: ", style="bold green")
        txt.append(f"{self._state['found']}   ")
        txt.append("Not found: ", style="bold red")
        txt.append(f"{failed}")
        if not_found:
            reasons = ", ".join(f"{k}={v}" for k, v in sorted(not_found.items()))
            txt.append(f" ({reasons})")

        return Panel(txt, title="Search Totals", border_style="cyan")

    def _render_last_search_panel(self) -> Panel:
        """
        Middle-left: details of the most recent search.
        """
        last = self._state["last_search"]

        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column("Field", style="bold", width=12)
        table.add_column("Value")

        if last is None:
            table.add_row("<none>", "-")
            return Panel(table, title="Last Search", border_style="yellow")

        table.add_row("Start", str(last.get("start")))
        table.add_row("Target", str(last.get("target")))
        table.add_row("Expanded", str(last.get("expanded", "-")))

        if self._state["last_success"]:
            table.add_row("Waypoints", str(last.get("waypoints", "-")))
            table.add_row("Cost", str(last.get("cost", "-")))
            table.add_row("Result", "[bold green]path found[/bold green]")
        else:
            table.add_row("Result", f"[bold red]{last.get('reason', 'unknown')}[/bold red]")

        return Panel(table, title="Last Search", border_style="yellow")

    def _render_grid_panel(self) -> Panel:
        """
        Middle-right: walkability edits and boundary reports.
        """
        blocked = sorted(self._state["blocked_cells"])
        violation = self._state["last_violation"]

        table = Table.grid()
        table.add_column(justify="left")

        table.add_row(f"[bold]Walkability edits:[/bold] {self._state['walkability_edits']}")
        if blocked:
            blocked_str = ", ".join(str(c) for c in blocked[:8])
            if len(blocked) > 8:
                blocked_str += ", …"
            table.add_row(f"[bold]Blocked:[/bold] {blocked_str}")
        else:
            table.add_row("[bold]Blocked:[/bold] <none>")

        table.add_row(
            f"[bold]Boundary violations:[/bold] {self._state['boundary_violations']}"
        )
        if violation:
            table.add_row(
                f"[bold]Last:[/bold] {violation.get('operation')} at {violation.get('cell')}"
            )

        return Panel(table, title="Grid Activity", border_style="magenta")

    def _build_layout(self) -> Layout:
        """
        Construct the overall layout for the dashboard.
        """
        layout = Layout()

        layout.split(
            Layout(name="top", size=3),
            Layout(name="middle", ratio=1),
        )
        layout["top"].update(self._render_totals_panel())

        layout["middle"].split_row(
            Layout(name="last_search"),
            Layout(name="grid"),
        )
        layout["last_search"].update(self._render_last_search_panel())
        layout["grid"].update(self._render_grid_panel())

        return layout

    def print_snapshot(self, height: int = 14) -> None:
        """Print the current layout once (no live refresh)."""
        self._console.print(self._build_layout(), height=height)
