"""Command line entry point.

Usage:
    confirmator FILE [FILE ...] [DELAY] [-trade] [-market] [-other]

Each FILE is an authenticator credential file; every account runs its
own scheduler loop. A bare number among the arguments overrides the
idle delay in seconds. Without any accept flag everything is accepted.
"""

import argparse
import asyncio
import contextlib
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from confirmator import __version__
from confirmator.config import Config, SchedulerConfig
from confirmator.core.scheduler import run_scheduler_loop
from confirmator.core.ticker import WaitTicker, console_display
from confirmator.core.types import AcceptPolicy
from confirmator.errors import ConfigurationError, ConfirmatorError, CredentialError
from confirmator.logging import setup_logging
from confirmator.session import AccountSession, create_session, load_credentials

logger = logging.getLogger(__name__)

EXIT_FATAL = 1
EXIT_USAGE = 2


@dataclass
class CliOptions:
    """Parsed command line."""

    paths: list[str] = field(default_factory=list)
    policy: AcceptPolicy = AcceptPolicy.ALL
    policy_defaulted: bool = True
    delay: int | None = None
    verbose: bool = False


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid delay: {value!r}") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"delay must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="confirmator",
        description="Automatically accept pending account confirmations.",
    )
    parser.add_argument(
        "args",
        nargs="+",
        metavar="FILE",
        help="credential file(s); a bare number sets the idle delay in seconds",
    )
    parser.add_argument("-trade", "--accept-trades", dest="trades", action="store_true", help="accept trade offers")
    parser.add_argument("-market", "--accept-market", dest="market", action="store_true", help="accept market listings")
    parser.add_argument("-other", "--accept-other", dest="other", action="store_true", help="accept other confirmations")
    parser.add_argument("-d", "--delay", type=_non_negative_int, help="idle delay between fetches in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> CliOptions:
    """Parse the command line into options.

    Exits with status 2 when no credential file is given.
    """
    parser = build_parser()
    ns = parser.parse_intermixed_args(argv)

    paths: list[str] = []
    delay = ns.delay
    for arg in ns.args:
        if arg.isdigit():
            delay = int(arg)
        else:
            paths.append(arg)
    if not paths:
        parser.error("no credential file was given")

    selected = ns.trades or ns.market or ns.other
    return CliOptions(
        paths=paths,
        policy=AcceptPolicy.from_flags(trades=ns.trades, market=ns.market, other=ns.other),
        policy_defaulted=not selected,
        delay=delay,
        verbose=ns.verbose,
    )


def set_console_title(title: str, stream: TextIO | None = None) -> None:
    """Set the terminal window title when attached to a terminal."""
    target = stream or sys.stdout
    if target.isatty():
        target.write(f"\x1b]0;{title}\x07")
        target.flush()


async def run_accounts(
    sessions: Sequence[AccountSession],
    policy: AcceptPolicy,
    scheduler_config: SchedulerConfig,
) -> None:
    """Run one scheduler loop per account until the first fatal error.

    Loops share nothing; a fatal error in one cancels the others and is
    re-raised.
    """
    # Concurrent progress bars would overwrite each other on one line
    show_progress = scheduler_config.show_progress and len(sessions) == 1
    display = console_display(enabled=show_progress)

    identities = ", ".join(session.identity for session in sessions)
    set_console_title(f"Confirmator {__version__} [{identities}]")

    tasks = [
        asyncio.create_task(
            run_scheduler_loop(
                policy,
                scheduler_config.idle_delay_seconds,
                session,
                accept_retry_delay_seconds=scheduler_config.accept_retry_delay_seconds,
                transport_error_threshold=scheduler_config.transport_error_threshold,
                ticker=WaitTicker(display),
            ),
            name=f"confirmator-{session.identity}",
        )
        for session in sessions
    ]

    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        for task in tasks:
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await asyncio.gather(*tasks, return_exceptions=True)

    for task in done:
        exc = task.exception()
        if exc is not None:
            raise exc


def main(argv: Sequence[str] | None = None) -> None:
    """Application entry point."""
    options = parse_args(argv)
    config = Config.from_env()
    level = logging.DEBUG if options.verbose else config.logging.level
    setup_logging(
        level=level,
        log_to_file=config.logging.log_to_file,
        log_dir=config.logging.log_dir,
    )

    if options.delay is not None:
        config.scheduler.idle_delay_seconds = options.delay
    if options.policy_defaulted:
        logger.warning("No target args given, accepting all confirmations.")

    try:
        sessions = [
            create_session(load_credentials(path), config.session) for path in options.paths
        ]
    except (CredentialError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    try:
        with contextlib.suppress(KeyboardInterrupt):
            asyncio.run(run_accounts(sessions, options.policy, config.scheduler))
    except ConfirmatorError as e:
        logger.exception(f"Fatal error: {e}")
        print(f"Fatal: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(EXIT_FATAL)


if __name__ == "__main__":
    main()
