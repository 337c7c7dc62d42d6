"""Main CLI application."""

import sys
from typing import Annotated

import click
import typer

from lunchy import __version__
from lunchy.cli.console import error, print_usage
from lunchy.cli.router import ROUTES, Route, dispatch

app = typer.Typer(
    name="lunchy",
    help="Lunchy - the friendly launchctl wrapper",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lunchy {__version__}")
        raise typer.Exit()


@app.callback()
def _main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Manage launchd user agents."""
    from lunchy.config import ConfigError, load_config
    from lunchy.logging import configure_logging
    from lunchy.service import ServiceManager

    if verbose:
        configure_logging("DEBUG", use_rich=True)
    else:
        configure_logging()

    # Tests and embedders can pass a ready-made manager as ctx.obj.
    if ctx.obj is None:
        try:
            ctx.obj = ServiceManager(load_config())
        except ConfigError as e:
            error(str(e))
            raise typer.Exit(1) from None


def _make_command(verb: str, route: Route):
    def command(
        ctx: typer.Context,
        target: Annotated[
            str | None, typer.Argument(metavar=route.metavar, show_default=False)
        ] = None,
    ) -> None:
        dispatch(ctx.obj, verb, target)

    command.__doc__ = route.help
    return command


# Extra arguments are ignored and a fragment may start with "-".
COMMAND_CONTEXT = {"allow_extra_args": True, "ignore_unknown_options": True}

for _verb, _route in ROUTES.items():
    app.command(
        _verb,
        help=_route.help,
        hidden=_route.hidden,
        context_settings=COMMAND_CONTEXT,
    )(_make_command(_verb, _route))


def main(argv: list[str] | None = None) -> None:
    """Console script entry point.

    No arguments at all, or an unknown verb, prints usage and exits 1.
    A command line Typer rejects also exits 1.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    verb = next((a for a in args if not a.startswith("-")), None)
    if not args or (verb is not None and verb not in ROUTES):
        print_usage()
        raise SystemExit(1)
    try:
        status = app(args=args, prog_name="lunchy", standalone_mode=False)
    except click.exceptions.UsageError as e:
        error(f"Error: {e.format_message()}")
        raise SystemExit(1) from None
    except click.exceptions.Abort:
        error("Aborted!")
        raise SystemExit(1) from None
    raise SystemExit(status or 0)


if __name__ == "__main__":
    main()
