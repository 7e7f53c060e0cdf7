"""CLI entry point using Click."""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Sequence

import click
from rich.console import Console
from rich.text import Text

from gitgallery import __version__
from gitgallery.config import PlaybackConfig, load_config
from gitgallery.errors import GalleryError
from gitgallery.playback.loader import load_events
from gitgallery.playback.scheduler import AsyncioScheduler
from gitgallery.playback.service import EventPlaybackService
from gitgallery.types.playback import PlaybackEvent, PlaybackSpeed
from gitgallery.utilities.logger import get_logger, setup_logging

_SPEED_CHOICES = [f"{s.value:g}" for s in PlaybackSpeed]


@click.command()
@click.argument("events_file", required=False, type=click.Path(dir_okay=False))
@click.option("--speed", "-s", type=click.Choice(_SPEED_CHOICES), default=None,
              help="Playback speed multiplier")
@click.option("--session", "session_id", default=None, help="Only play events from this session")
@click.option("--event-type", default=None, help="Only play events of this type")
@click.option("--autoplay/--no-autoplay", default=None, help="Start playing as soon as the TUI opens")
@click.option("--tui/--no-tui", "use_tui", default=None, help="Interactive TUI or headless console playback")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
@click.option("--version", is_flag=True, help="Show version and exit")
def main(
    events_file: str | None,
    speed: str | None,
    session_id: str | None,
    event_type: str | None,
    autoplay: bool | None,
    use_tui: bool | None,
    debug: bool,
    json_logs: bool,
    version: bool,
) -> None:
    """Git Gallery playback - replay a session's events.

    EVENTS_FILE is a JSON or JSON Lines export of the agent-events timeline.
    """
    if version:
        click.echo(f"gitgallery {__version__}")
        return

    if not events_file:
        raise click.UsageError("Missing argument 'EVENTS_FILE'.")

    # Build CLI args dict
    cli_args: dict[str, Any] = {}
    if speed is not None:
        cli_args["speed"] = float(speed)
    if session_id:
        cli_args["session_id"] = session_id
    if event_type:
        cli_args["event_type"] = event_type
    if autoplay is not None:
        cli_args["autoplay"] = autoplay
    if use_tui is not None:
        cli_args["tui"] = use_tui
    if debug:
        cli_args["debug"] = True
    if json_logs:
        cli_args["json_logs"] = True

    try:
        config = load_config(cli_args=cli_args)
        setup_logging(debug=config.debug, json_output=config.json_logs)
        log = get_logger("gitgallery.cli")

        events = load_events(
            events_file,
            session_id=config.session_id,
            event_type=config.event_type,
        )
        log.debug("events_loaded", path=events_file, count=len(events))
    except GalleryError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if config.tui:
        _run_tui(config, events)
    else:
        _run_headless(config, events)


def _run_tui(config: PlaybackConfig, events: Sequence[PlaybackEvent]) -> None:
    """Run the interactive playback TUI."""
    from gitgallery.tui.app import PlaybackApp

    app = PlaybackApp(events, speed=config.playback_speed, autoplay=config.autoplay)
    try:
        app.run()
    finally:
        app.playback.destroy()


def _run_headless(config: PlaybackConfig, events: Sequence[PlaybackEvent]) -> None:
    """Play the whole sequence, printing each event as it is reached."""
    console = Console(highlight=False)
    if not events:
        console.print("No events to play.", style="dim")
        return

    asyncio.run(play_to_end(events, speed=config.playback_speed, console=console))


async def play_to_end(
    events: Sequence[Any],
    *,
    speed: PlaybackSpeed = PlaybackSpeed.NORMAL,
    console: Console | None = None,
) -> int:
    """Play *events* in real time until playback stops on the last one.

    Returns the number of events delivered.
    """
    if not events:
        return 0

    console = console or Console(highlight=False)
    finished = asyncio.Event()
    delivered = 0
    total = len(events)

    service: EventPlaybackService[Any] = EventPlaybackService(
        events,
        scheduler=AsyncioScheduler(asyncio.get_running_loop()),
        speed=speed,
    )

    def on_event(event: Any, index: int) -> None:
        nonlocal delivered
        delivered += 1
        label = getattr(event, "label", None) or str(event)
        console.print(Text.assemble((f"[{index + 1}/{total}] ", "bold cyan"), label))

    def on_state(state: Any) -> None:
        if not state.is_playing and state.current_index == state.total_events - 1:
            finished.set()

    service.on_event_change(on_event)
    service.on_state_change(on_state)
    try:
        service.play()
        await finished.wait()
    finally:
        service.destroy()
    return delivered
