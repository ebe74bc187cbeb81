"""Command-line interface for Switchboard.

Provides commands for running the server and checking configuration files.
"""

from __future__ import annotations

import asyncio
import contextlib
import signal
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

import click
import structlog

from switchboard import __version__
from switchboard.core.config import ServerConfig, SwitchboardConfig
from switchboard.core.state import StateStore
from switchboard.devices import LogActuator, TextDisplay, attach
from switchboard.server import SwitchboardServer

log = structlog.get_logger()


def _configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure structlog with appropriate log level filtering."""
    import logging

    if quiet:
        min_level = logging.WARNING
    elif verbose:
        min_level = logging.DEBUG
    else:
        min_level = logging.INFO

    def _filter_by_level(
        _logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        if getattr(logging, method_name.upper(), 0) < min_level:
            raise structlog.DropEvent
        return event_dict

    structlog.configure(
        processors=[
            _filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=True),
        ],
    )


def _load_config(config_path: Path | None) -> SwitchboardConfig:
    if config_path is None:
        return SwitchboardConfig()
    return SwitchboardConfig.from_yaml(config_path)


@click.group()
@click.version_option(version=__version__, prog_name="switchboard")
def cli() -> None:
    """Switchboard - shared device state over WebSocket.

    Serve one on/off actuator to many clients.
    """


@cli.command()
@click.argument("config_path", required=False, type=click.Path(exists=True, path_type=Path))
@click.option("--host", default=None, help="Bind address (overrides config)")
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="WebSocket server port (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress progress output",
)
@click.option(
    "--no-display",
    is_flag=True,
    help="Do not render the status display",
)
def run(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
    quiet: bool,
    no_display: bool,
) -> None:
    """Run the Switchboard server.

    CONFIG_PATH: Optional path to YAML configuration file
    """
    _configure_logging(verbose=verbose, quiet=quiet)

    try:
        config = _load_config(config_path)
        overrides: dict[str, Any] = {}
        if host is not None:
            overrides["host"] = host
        if port is not None:
            overrides["port"] = port
        if overrides:
            config.server = ServerConfig.model_validate(
                {**config.server.model_dump(), **overrides}
            )
    except Exception as e:
        log.error("Failed to load configuration", error=str(e))
        raise SystemExit(1) from e

    store = StateStore(initial=config.state.initial)
    display: TextDisplay | None = None
    if config.display.enabled and not no_display:
        display = TextDisplay(title=config.display.title)
        display.connecting(f"{config.server.host}:{config.server.port}")
    attach(store, LogActuator(active_low=config.actuator.active_low))

    server = SwitchboardServer(store, config.server)

    async def main() -> None:
        shutdown_event = asyncio.Event()
        loop = asyncio.get_running_loop()

        def handle_signal(signum: int, _frame: object) -> None:
            log.info("Received signal, stopping server", signal=signum)
            loop.call_soon_threadsafe(shutdown_event.set)

        signal.signal(signal.SIGINT, handle_signal)
        signal.signal(signal.SIGTERM, handle_signal)

        try:
            await server.start_background()
            if display is not None:
                display.address = f"{config.server.host}:{server.port}"
                attach(store, display=display)
            log.info("Open the control page", url=f"http://{config.server.host}:{server.port}/")
            await shutdown_event.wait()
        finally:
            with contextlib.suppress(Exception):
                await server.stop()

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Interrupted by user")
    except Exception as e:
        log.error("Server failed", error=str(e))
        if verbose:
            import traceback

            traceback.print_exc()
        raise SystemExit(1) from e


@cli.command()
@click.argument("config_path", type=click.Path(exists=True, path_type=Path))
def validate(config_path: Path) -> None:
    """Validate configuration file.

    CONFIG_PATH: Path to YAML configuration file

    Exits with code 0 if valid, 1 if invalid.
    """
    try:
        config = SwitchboardConfig.from_yaml(config_path)
    except Exception as e:
        log.error("Configuration invalid", error=str(e))
        raise SystemExit(1) from e

    log.info("Configuration valid", host=config.server.host, port=config.server.port)
    click.echo(f"  Server: {config.server.host}:{config.server.port}")
    max_clients = config.server.max_clients
    click.echo(f"  Max clients: {max_clients if max_clients is not None else 'unlimited'}")
    click.echo(f"  Initial state: {'on' if config.state.initial else 'off'}")
    click.echo(f"  Actuator: {'active-low' if config.actuator.active_low else 'active-high'}")
    click.echo(f"  Display: {'enabled' if config.display.enabled else 'disabled'}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
