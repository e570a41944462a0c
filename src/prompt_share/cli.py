"""CLI entry point for prompt-share."""

import logging
import os

import click
import uvicorn


@click.group()
def main():
    """Browse and share Claude Code session prompts."""
    pass


@main.command()
@click.option("--port", default=8080, help="Port to serve on.")
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
@click.option(
    "--projects-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Claude Code projects directory (default: ~/.claude/projects).",
)
@click.option(
    "--archive-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Archive overlay file (default: data/archive.json).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    help="Logging verbosity.",
)
def serve(port: int, host: str, projects_dir: str | None, archive_file: str | None, log_level: str):
    """Start the web interface."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # The server builds its provider from the environment on first request.
    if projects_dir:
        os.environ["PROMPT_SHARE_PROJECTS_PATH"] = projects_dir
    if archive_file:
        os.environ["PROMPT_SHARE_ARCHIVE_PATH"] = archive_file

    click.echo(f"Starting prompt-share on http://{host}:{port}")
    uvicorn.run("prompt_share.server:app", host=host, port=port, reload=False, log_level=log_level)
