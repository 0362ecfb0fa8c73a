"""mumbot CLI module.

Typer-based CLI application entry point.
Commands: chat, send; subcommand groups: config, self
"""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from mumbot import __version__
from mumbot.commands import Reply
from mumbot.config import resolve_data_file, save_data_file
from mumbot.errors import StorageError
from mumbot.parser import Session
from mumbot.storage import TaskFile

logger = logging.getLogger(__name__)

# Main application
app = typer.Typer(
    name="mumbot",
    help="A chatty personal task tracker",
    no_args_is_help=True,
)

config_app = typer.Typer(
    name="config",
    help="Configuration commands",
    no_args_is_help=True,
)

self_app = typer.Typer(
    name="self",
    help="Tool information",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")
app.add_typer(self_app, name="self")

GREETING = "Hello! I'm MumBot. What do you need to get done today?"
PROMPT = "> "


class GlobalContext:
    """Holds global options for commands."""

    def __init__(self) -> None:
        self.file: str | None = None
        self.json_output: bool = False
        self.verbose: bool = False


# Global context instance
_context = GlobalContext()


def version_callback(value: bool) -> None:
    """Callback for --version option."""
    if value:
        typer.echo(f"mumbot version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    file: Annotated[
        Optional[str],
        typer.Option(
            "--file",
            "-f",
            help="Specify the task file path",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output in JSON format",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging on stderr",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """mumbot - A chatty personal task tracker."""
    _context.file = file
    _context.json_output = json_output
    _context.verbose = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _open_session() -> tuple[TaskFile, Session]:
    """Load the configured task file into a new session."""
    location = resolve_data_file(_context.file)
    task_file = TaskFile(location.path)

    try:
        tasks = task_file.load()
    except StorageError as e:
        typer.echo(f"Cannot read task file: {e}", err=True)
        raise typer.Exit(code=1)

    return task_file, Session(tasks)


def _echo_reply(reply: Reply) -> None:
    if _context.json_output:
        result = {
            "response": reply.response,
            "continue": reply.keep_running,
            "error": reply.error,
        }
        typer.echo(json.dumps(result, ensure_ascii=False))
    else:
        typer.echo(reply.response)


# ===== task commands =====


@app.command("chat")
def chat() -> None:
    """Start an interactive session; type Bye to leave.

    The task file is saved after every line.
    """
    task_file, session = _open_session()

    if not _context.json_output:
        typer.echo(GREETING)

    while True:
        if not _context.json_output:
            typer.echo(PROMPT, nl=False)
        line = sys.stdin.readline()
        if not line:
            # End of input
            break

        reply = session.handle(line.rstrip("\r\n"))
        _echo_reply(reply)
        task_file.save(session.tasks)
        if not reply.keep_running:
            break


@app.command("send")
def send(
    text: Annotated[
        str,
        typer.Argument(help="Command line to run, e.g. 'todo buy milk'"),
    ],
) -> None:
    """Run a single command against the stored task list."""
    task_file, session = _open_session()

    reply = session.handle(text)
    if not reply.error:
        task_file.save(session.tasks)

    _echo_reply(reply)
    if reply.error:
        raise typer.Exit(code=1)


# ===== config subcommands =====


@config_app.command("path")
def config_path() -> None:
    """Show the resolved task file path."""
    location = resolve_data_file(_context.file)
    exists = location.path.exists()

    if _context.json_output:
        result = {
            "path": str(location.path),
            "source": location.source,
            "exists": exists,
        }
        typer.echo(json.dumps(result, ensure_ascii=False))
    else:
        typer.echo(f"Path: {location.path}")
        typer.echo(f"Source: {location.describe()}")
        typer.echo(f"Exists: {'Yes' if exists else 'No'}")


@config_app.command("set-path")
def config_set_path(
    path: Annotated[
        str,
        typer.Argument(help="Path to set as default task file"),
    ],
) -> None:
    """Save the default task file path to the config file."""
    abs_path = Path(path).resolve()

    config_file = save_data_file(abs_path)

    if _context.json_output:
        result = {
            "path": str(abs_path),
            "config_file": str(config_file),
        }
        typer.echo(json.dumps(result, ensure_ascii=False))
    else:
        typer.echo(f"Configuration saved: {abs_path}")
        typer.echo(f"Config file: {config_file}")


# ===== self subcommands =====


@self_app.command("version")
def self_version() -> None:
    """Show version information."""
    if _context.json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"mumbot version {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
