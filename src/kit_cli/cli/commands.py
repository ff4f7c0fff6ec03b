"""Command table and actions for the ``kit`` verbs.

Each action is a coroutine taking the parsed options and a
:class:`CommandContext`.  Actions load the project configuration fresh,
pull their subsystem from the registry only when they run, and hand
every failure to :func:`~kit_cli.cli.errors.handle_error`; no action
prints its own fatal error.
"""

from __future__ import annotations

import argparse
import functools
import logging
import os
import sys
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn

from kit_cli.cli import exit_codes
from kit_cli.cli.build_log import BuildLogger
from kit_cli.cli.console import console
from kit_cli.cli.errors import handle_error
from kit_cli.cli.preflight import check_port
from kit_cli.cli.welcome import welcome
from kit_cli.core.models import Command, Option, ServerBinding
from kit_cli.core.protocols import (
    Adapter,
    Builder,
    ConfigLoader,
    ConfigTask,
    DevServer,
    PreviewServer,
)
from kit_cli.core.registry import SubsystemRegistry
from kit_cli.core.settings import Settings
from kit_cli.exceptions import RemovedOptionError
from kit_cli.utils.aio import resolve
from kit_cli.utils.mappings import get_path

LOG = logging.getLogger(__name__)

ADAPTERS_DOCS_URL = "https://kit.svelte.dev/docs/adapters"
PREVIEW_HINT = "kit preview"
ALL_INTERFACES = "0.0.0.0"

Action = Callable[[argparse.Namespace, "CommandContext"], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class CommandContext:
    """Everything an action needs besides its own options."""

    registry: SubsystemRegistry
    settings: Settings
    cwd: Path

    async def load_config(self, settings: Settings) -> Any:
        """Load the project configuration; never cached between runs."""
        loader: ConfigLoader = self.registry.load("config")
        return await resolve(loader(cwd=self.cwd, mode=settings.mode))


def guarded(action: Action) -> Action:
    """Route any exception raised by *action* to the error normalizer."""

    @functools.wraps(action)
    async def wrapper(options: argparse.Namespace, ctx: CommandContext) -> None:
        try:
            await action(options, ctx)
        except Exception as exc:  # noqa: BLE001
            handle_error(exc)

    return wrapper


def force_exit(code: int) -> NoReturn:
    """End the process immediately, without waiting on open handles."""
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(code)


def _reject_removed_https_shorthand(options: argparse.Namespace) -> None:
    # TODO: drop -H from the command table once the 1.0 release ships.
    if getattr(options, "H", False):
        raise RemovedOptionError("-H", "--https")


def removed_option_in(argv: Sequence[str]) -> RemovedOptionError | None:
    """Return the error for a removed flag passed to a verb that declares it.

    Checked when the command line fails to parse, so the removed flag is
    reported ahead of any other argument error.
    """
    for index, token in enumerate(argv):
        command = next((c for c in COMMANDS if c.name == token), None)
        if command is None:
            continue
        if _REMOVED_H in command.options and "-H" in argv[index + 1:]:
            return RemovedOptionError("-H", "--https")
        return None
    return None


async def _close_adapter(adapter: Any) -> None:
    close = getattr(adapter, "close", None)
    if callable(close):
        await resolve(close())


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

@guarded
async def dev(options: argparse.Namespace, ctx: CommandContext) -> None:
    """Start the development server and report where it can be reached."""
    _reject_removed_https_shorthand(options)

    settings = ctx.settings.with_default_mode("development")
    config = await ctx.load_config(settings)

    start: DevServer = ctx.registry.load("dev")
    result = await resolve(
        start(
            cwd=ctx.cwd,
            port=options.port,
            host=options.host,
            https=options.https,
            config=config,
        )
    )

    binding = ServerBinding.from_dev_result(
        result,
        https=options.https,
        open_browser=options.open,
    )
    welcome(binding, cwd=ctx.cwd)


@guarded
async def build(options: argparse.Namespace, ctx: CommandContext) -> None:
    """Build for production, then run the configured adapter if any."""
    settings = ctx.settings.with_default_mode("production")
    config = await ctx.load_config(settings)

    log = BuildLogger(verbose=options.verbose)

    builder: Builder = ctx.registry.load("build")
    result = await resolve(builder(config, log=log))

    console.print(
        f"\nRun [bold cyan]{PREVIEW_HINT}[/bold cyan] to preview your "
        "production build locally."
    )

    adapter = get_path(config, "kit", "adapter")
    if adapter:
        adapt: Adapter = ctx.registry.load("adapt")
        await resolve(
            adapt(
                config,
                get_path(result, "build_data"),
                get_path(result, "prerendered"),
                log=log,
            )
        )
        await _close_adapter(adapter)
        # adapters may leave db connections and similar handles open
        force_exit(exit_codes.SUCCESS)

    console.print("\n[bold yellow]No adapter specified[/bold yellow]")
    console.print(
        f"See [bold cyan]{ADAPTERS_DOCS_URL}[/bold cyan] to learn how to "
        "configure your app to run on the platform of your choosing"
    )


@guarded
async def preview(options: argparse.Namespace, ctx: CommandContext) -> None:
    """Serve an already-built app after checking its port is free."""
    _reject_removed_https_shorthand(options)

    await check_port(options.port)

    settings = ctx.settings.with_default_mode("production")
    config = await ctx.load_config(settings)

    serve: PreviewServer = ctx.registry.load("preview")
    await resolve(
        serve(
            port=options.port,
            host=options.host,
            config=config,
            https=options.https,
        )
    )

    welcome(
        ServerBinding(
            port=options.port,
            host=options.host,
            https=options.https,
            open=options.open,
        )
    )


@guarded
async def package(options: argparse.Namespace, ctx: CommandContext) -> None:
    """Create a package from the project's library code."""
    config = await ctx.load_config(ctx.settings)
    LOG.debug("Packaging into %s", options.dir)

    make_package: ConfigTask = ctx.registry.load("package")
    await resolve(make_package(config))


@guarded
async def sync(options: argparse.Namespace, ctx: CommandContext) -> None:
    """Regenerate the framework's generated files."""
    config = await ctx.load_config(ctx.settings)

    sync_all: ConfigTask = ctx.registry.load("sync")
    await resolve(sync_all(config))


# ---------------------------------------------------------------------------
# Command table
# ---------------------------------------------------------------------------

_PORT = Option(("-p", "--port"), "Port", type=int)
_OPEN = Option(("-o", "--open"), "Open a browser tab", type=bool)
_HOST = Option(("--host",), "Host (only use this on trusted networks)", const=ALL_INTERFACES)
_HTTPS = Option(("--https",), "Use self-signed HTTPS certificate", type=bool)
_REMOVED_H = Option(("-H",), "no longer supported, use --https instead", type=bool)

COMMANDS: tuple[Command, ...] = (
    Command(
        "dev",
        "Start a development server",
        (_PORT, _OPEN, _HOST, _HTTPS, _REMOVED_H),
        dev,
    ),
    Command(
        "build",
        "Create a production build of your app",
        (Option(("--verbose",), "Log more stuff", default=False, type=bool),),
        build,
    ),
    Command(
        "preview",
        "Serve an already-built app",
        (
            Option(_PORT.flags, _PORT.help, default=3000, type=int),
            Option(_OPEN.flags, _OPEN.help, default=False, type=bool),
            Option(_HOST.flags, _HOST.help, default="localhost", const=ALL_INTERFACES),
            Option(_HTTPS.flags, _HTTPS.help, default=False, type=bool),
            _REMOVED_H,
        ),
        preview,
    ),
    Command(
        "package",
        "Create a package",
        (Option(("-d", "--dir"), "Destination directory", default="package"),),
        package,
    ),
    Command(
        "sync",
        "Synchronise generated files",
        (),
        sync,
    ),
)
