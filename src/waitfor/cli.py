"""CLI interface for waitfor"""

import functools
import logging
import queue
import signal
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import click
from pydantic import ValidationError

from waitfor.application.waiter import wait_for
from waitfor.domain.cancel import CancelToken
from waitfor.domain.config import WaitConfig
from waitfor.domain.errors import WaitCancelledError, WaitTimeoutError
from waitfor.domain.options import (
    Option,
    exit_on_error,
    with_backoff,
    with_cancel,
    with_description,
    with_limit,
    with_max_interval,
    with_min_interval,
    with_reports,
)
from waitfor.infrastructure.config.config_manager import ConfigManager, ConfigurationError
from waitfor.infrastructure.probes import Probe, ProbeFactory

logger = logging.getLogger(__name__)

EXIT_CANCELLED = 130


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def wait_flags(f: Callable) -> Callable:
    """Attach the wait tuning flags shared by every probe command"""
    flags = [
        click.option("--limit", type=float, help="Total time to wait, in seconds"),
        click.option("--interval", type=float, help="Fixed interval (sets min and max)"),
        click.option("--min-interval", type=float, help="Starting interval, in seconds"),
        click.option("--max-interval", type=float, help="Maximum interval, in seconds"),
        click.option("--backoff", type=float, help="Interval growth factor (>= 1.0)"),
        click.option("--reports", type=int, help="Approximate number of progress reports (0 = none)"),
        click.option("--description", type=str, help="Description used in reports and errors"),
        click.option("--exit-on-error", is_flag=True, help="Stop at the first probe error"),
    ]
    for flag in reversed(flags):
        f = flag(f)
    return f


def _resolve_wait_config(base: WaitConfig, flags: Dict[str, Any]) -> WaitConfig:
    """Overlay CLI flags (those that were given) on the configured defaults

    Raises:
        ValidationError: If the combined settings are invalid
    """
    overrides = {k: v for k, v in flags.items() if v is not None and k != "interval"}
    if not overrides.get("exit_on_error"):
        overrides.pop("exit_on_error", None)
    if flags.get("interval") is not None:
        overrides["min_interval"] = flags["interval"]
        overrides["max_interval"] = flags["interval"]
    return WaitConfig(**{**base.model_dump(), **overrides})


def build_options(config: WaitConfig, description: str, token: Optional[CancelToken] = None) -> List[Option]:
    """Translate wait settings into wait_for options"""
    options = [
        with_limit(config.limit),
        with_min_interval(config.min_interval),
        with_max_interval(config.max_interval),
        with_backoff(config.backoff),
        with_reports(config.reports),
        with_description(config.description or description),
        exit_on_error(config.exit_on_error),
    ]
    if token is not None:
        options.append(with_cancel(token))
    return options


class SignalCanceller:
    """Cancels a token when SIGINT or SIGTERM arrives

    The handler only puts the signal number on a SimpleQueue, whose put() is
    reentrant. A watcher thread takes it from there and cancels the token, so
    the handler never touches the token's locks.
    """

    SIGNALS = (signal.SIGINT, signal.SIGTERM)

    def __init__(self, token: CancelToken):
        self.token = token
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._watcher = threading.Thread(target=self._watch, name="waitfor-signals", daemon=True)
        self._previous: Dict[int, Any] = {}

    def _handler(self, signum, frame) -> None:
        self._queue.put(signum)

    def _watch(self) -> None:
        signum = self._queue.get()
        if signum is None:
            return
        self.token.cancel(WaitCancelledError(f"interrupted by {signal.Signals(signum).name}"))

    def __enter__(self) -> "SignalCanceller":
        self._watcher.start()
        for signum in self.SIGNALS:
            self._previous[signum] = signal.signal(signum, self._handler)
        return self

    def __exit__(self, *exc_info) -> None:
        for signum, old in self._previous.items():
            signal.signal(signum, old)
        self._queue.put(None)
        self._watcher.join()


def _run_probe(ctx: click.Context, probe: Probe, flags: Dict[str, Any]) -> None:
    verbose = ctx.obj.get("verbose", False)
    config_manager: ConfigManager = ctx.obj["config_manager"]

    try:
        wait_config = _resolve_wait_config(config_manager.get_wait_config(), flags)
    except ValidationError as e:
        probe.close()
        _die(f"Invalid wait settings: {e}", verbose=verbose, exc=e)

    token = CancelToken()
    options = build_options(wait_config, probe.describe(), token)
    description = wait_config.description or probe.describe()
    logger.info(f"Waiting for {description} (limit {wait_config.limit}s)")

    try:
        with SignalCanceller(token):
            wait_for(probe, *options)
    except WaitCancelledError as e:
        click.echo(f"Cancelled: {e}", err=True)
        ctx.exit(EXIT_CANCELLED)
    except WaitTimeoutError as e:
        _die(str(e), verbose=verbose, exc=e)
    except Exception as e:
        _die(f"Wait for {description} failed: {e}", verbose=verbose, exc=e)
    finally:
        probe.close()

    click.echo(f"Ready: {description}")


def _create_probe(ctx: click.Context, probe_type: str, config: Dict[str, Any]) -> Probe:
    try:
        return ProbeFactory.create(probe_type, config)
    except ValueError as e:
        _die(str(e), verbose=ctx.obj.get("verbose", False), exc=e)


def _collect_flags(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    names = ("limit", "interval", "min_interval", "max_interval", "backoff", "reports", "description", "exit_on_error")
    return {name: kwargs.pop(name) for name in names}


def probe_command(f: Callable) -> Callable:
    """Split the shared wait flags off before calling the probe command"""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        flags = _collect_flags(kwargs)
        return f(*args, flags=flags, **kwargs)

    return wait_flags(wrapper)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .waitfor.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """waitfor - wait until a condition holds"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["verbose"] = verbose
    try:
        ctx.obj["config_manager"] = ConfigManager(config_path=config)
    except ConfigurationError as e:
        _die(str(e), verbose=verbose, exc=e)


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("argv", nargs=-1, required=True, type=click.UNPROCESSED)
@click.option("--timeout", type=float, help="Seconds before a single run is killed")
@probe_command
@click.pass_context
def command(ctx, argv: tuple, timeout: Optional[float], flags: Dict[str, Any]):
    """Wait until a command exits with status 0.

    ARGV: Command and arguments; put them after `--`
    """
    probe_config = ctx.obj["config_manager"].get_command_config().model_dump()
    probe_config["argv"] = list(argv)
    if timeout is not None:
        probe_config["timeout"] = timeout
    _run_probe(ctx, _create_probe(ctx, "command", probe_config), flags)


@cli.command()
@click.argument("url", type=str)
@click.option("--status", "statuses", type=int, multiple=True, help="Accepted status code (repeatable)")
@click.option("--timeout", type=float, help="Per-request timeout in seconds")
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification")
@probe_command
@click.pass_context
def http(ctx, url: str, statuses: tuple, timeout: Optional[float], insecure: bool, flags: Dict[str, Any]):
    """Wait until URL answers with an accepted status."""
    probe_config = ctx.obj["config_manager"].get_http_config().model_dump()
    probe_config["url"] = url
    if statuses:
        probe_config["expected_status"] = list(statuses)
    if timeout is not None:
        probe_config["timeout"] = timeout
    if insecure:
        probe_config["verify"] = False
    _run_probe(ctx, _create_probe(ctx, "http", probe_config), flags)


@cli.command()
@click.argument("host", type=str)
@click.argument("port", type=int)
@click.option("--timeout", type=float, help="Connect timeout in seconds")
@probe_command
@click.pass_context
def tcp(ctx, host: str, port: int, timeout: Optional[float], flags: Dict[str, Any]):
    """Wait until HOST:PORT accepts TCP connections."""
    probe_config = ctx.obj["config_manager"].get_tcp_config().model_dump()
    probe_config.update(host=host, port=port)
    if timeout is not None:
        probe_config["timeout"] = timeout
    _run_probe(ctx, _create_probe(ctx, "tcp", probe_config), flags)


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
