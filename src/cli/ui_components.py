"""Rich UI components for the CLI.

Why separate components:
- Keeps command logic apart from visual details.
- Lets several commands reuse the same panels.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from core.domain.models import TrackingStatus
from core.services.masking import masked_config


def print_banner(console: Console) -> None:
    """Welcome banner shown before the setup wizard."""

    title = Text("Dominos CLI", style="bold blue")
    subtitle = Text("Presets • One-command ordering • Tracking", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="blue", padding=(1, 4)))


def print_config(console: Console, doc: dict[str, Any], location: str) -> None:
    """Configuration with the card number masked; `doc` itself is not modified."""

    console.print(Text("Configuration:", style="blue"))
    console.print_json(json.dumps(masked_config(doc)))
    console.print(Text(f"\nLocation: {location}", style="dim"))


def build_tracking_panel(status: TrackingStatus, *, now: datetime | None = None) -> Panel:
    """Panel for the first active order of a phone number."""

    body = Text()
    if status.order_id:
        body.append(f"Order #{status.order_id}\n", style="dim")
    if status.store_id:
        body.append(f"Store ID: {status.store_id}\n", style="dim")
    minutes = status.minutes_since_taken(now)
    if minutes is not None:
        body.append(f"Ordered: {minutes} minutes ago\n", style="dim")

    if status.status_items:
        body.append("\nProgress:\n", style="bold")
        for step in status.status_items:
            if step.complete:
                body.append(f"  ✓ {step.name}\n", style="green")
            else:
                body.append(f"  ○ {step.name}\n", style="dim")

    if status.estimated_wait_minutes:
        body.append(f"\nEstimated time: {status.estimated_wait_minutes} minutes", style="dim")

    title = Text(f"Order Status: {status.order_status}", style="bold blue")
    return Panel(body, title=title, border_style="blue")
