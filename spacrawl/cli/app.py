"""Typer application entry point for spacrawl CLI."""

import typer

from spacrawl.cli.commands import routes as routes_command
from spacrawl.cli.commands import scrape as scrape_command
from spacrawl.cli.commands import screenshots as screenshots_command
from spacrawl.cli.commands import show as show_command

app = typer.Typer(no_args_is_help=True, name="spacrawl")

app.command(name="scrape", help="Crawl an app and save its structure")(
    scrape_command.scrape_command
)
app.command(name="routes", help="Discover routes linked from an entry page")(
    routes_command.routes_command
)
app.command(name="show", help="Summarize a saved crawl")(show_command.show_command)
app.command(name="screenshots", help="Export screenshots from a saved crawl")(
    screenshots_command.screenshots_command
)


if __name__ == "__main__":
    app()
