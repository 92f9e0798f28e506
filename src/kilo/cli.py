"""CLI entry point for kilo. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys

import click

from kilo import __version__
from kilo.config import LOG_LEVELS, EditorConfig
from kilo.editor import Editor
from kilo.terminal import CLEAR_SCREEN, CURSOR_HOME, ProcessTerminal, TerminalError

logger = logging.getLogger(__name__)


def _setup_logging(config: EditorConfig) -> None:
    # The screen belongs to the editor, so logs only ever go to a file.
    if not config.log_file:
        return
    logging.basicConfig(
        filename=config.log_file,
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _die(terminal: ProcessTerminal, error: Exception) -> None:
    """Restore the terminal, report *error* and exit with status 1."""
    logger.exception("Fatal error")
    try:
        terminal.write((CLEAR_SCREEN + CURSOR_HOME).encode())
        terminal.disable_raw_mode()
    except TerminalError:
        logger.exception("Could not restore terminal")
    click.echo(f"kilo: {error}", err=True)
    sys.exit(1)


@click.command()
@click.argument("filename", required=False, type=click.Path(dir_okay=False))
@click.option("--log-file", default=None, help="Write debug logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS),
    default=None,
    help="Log level (default: warning)",
)
@click.version_option(__version__, prog_name="kilo")
def main(filename, log_file, log_level):
    """Edit FILENAME, or an empty untitled document."""
    config = EditorConfig.from_env()
    if log_file:
        config.log_file = log_file
    if log_level:
        config.log_level = log_level
    _setup_logging(config)

    terminal = ProcessTerminal()
    try:
        terminal.enable_raw_mode()
        editor = Editor(terminal, config)
        if filename:
            editor.open(filename)
        editor.run()
    except (TerminalError, OSError) as e:
        _die(terminal, e)
    finally:
        try:
            terminal.disable_raw_mode()
        except TerminalError:
            logger.exception("Could not restore terminal mode")


if __name__ == "__main__":
    main()
