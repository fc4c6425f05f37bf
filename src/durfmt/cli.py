"""Click CLI entry point for durfmt."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.table import Table

from durfmt import __version__
from durfmt.config import load_config
from durfmt.errors import DurfmtError
from durfmt.utils.logging import console, err_console, get_logger, setup_logging
from durfmt.utils.time_format import hms_to_seconds

log = get_logger(__name__)

UNIT_CHOICE = click.Choice(["s", "ms", "us", "ns"])


class DurationParamType(click.ParamType):
    """A number of units, or a [-][H:]MM:SS[.fff] clock string."""

    name = "duration"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            return float(value)
        try:
            return hms_to_seconds(value)
        except ValueError:
            self.fail(f"{value!r} is not a number or [H:]MM:SS duration", param, ctx)


DURATION = DurationParamType()


def _fail(error: DurfmtError) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {error}", markup=True, highlight=False)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="durfmt")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option(
    "-c", "--config", "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to durfmt.yaml",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """durfmt: break durations down and render them through templates."""
    setup_logging(verbose=verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


@cli.command()
@click.option(
    "-o", "--output", "output_path",
    type=click.Path(),
    default="durfmt.yaml",
    help="Output path for the config file",
)
def init(output_path: str) -> None:
    """Generate a starter durfmt.yaml."""
    from durfmt.config import DurfmtConfig

    out = Path(output_path)
    if out.exists():
        if not click.confirm(f"{out} already exists. Overwrite?"):
            raise SystemExit(0)

    import yaml

    config = DurfmtConfig()
    data = config.model_dump()
    out.write_text(
        yaml.dump(data, default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
    console.print(f"[green]Config written to {out}[/green]")
    console.print("Edit the templates, then run:")
    console.print("  durfmt format -p clock 5400")


@cli.command("format")
@click.argument("values", nargs=-1, required=True, type=DURATION)
@click.option("-t", "--template", default=None, help="Template, e.g. '%H:%M:%S'")
@click.option("-p", "--preset", default=None, help="Named template from the config")
@click.option("-u", "--unit", type=UNIT_CHOICE, default=None, help="Unit of VALUES")
@click.pass_context
def format_cmd(
    ctx: click.Context,
    values: tuple[float, ...],
    template: str | None,
    preset: str | None,
    unit: str | None,
) -> None:
    """Render each VALUE through one template, one line per value."""
    from durfmt.adapters import decompose_count
    from durfmt.formatting import Template

    if template is not None and preset is not None:
        raise click.UsageError("Use either --template or --preset, not both")

    config = load_config(ctx.obj["config_path"])
    if preset is not None:
        if preset not in config.templates:
            raise click.BadParameter(
                f"unknown preset {preset!r} (known: {', '.join(sorted(config.templates))})",
                param_hint="--preset",
            )
        template = config.templates[preset]
    elif template is None:
        template = config.format.template
    unit = unit or config.input.unit

    try:
        compiled = Template(template) if template is not None else None
        for value in values:
            time = decompose_count(value, unit)
            click.echo(compiled.render(time) if compiled is not None else str(time))
    except DurfmtError as e:
        _fail(e)


@cli.command()
@click.argument("value", type=DURATION)
@click.option("-u", "--unit", type=UNIT_CHOICE, default=None, help="Unit of VALUE")
@click.pass_context
def show(ctx: click.Context, value: float, unit: str | None) -> None:
    """Show every field of VALUE's breakdown."""
    from durfmt.adapters import decompose_count

    config = load_config(ctx.obj["config_path"])
    try:
        time = decompose_count(value, unit or config.input.unit)
    except DurfmtError as e:
        _fail(e)

    table = Table(title=str(time))
    table.add_column("Field")
    table.add_column("Value", justify="right")
    rows = [
        ("sign", time.sign.name.lower()),
        ("years", time.years),
        ("days", time.days),
        ("hours", time.hours),
        ("minutes", time.minutes),
        ("seconds", time.seconds),
        ("milliseconds", time.milliseconds),
        ("microseconds", time.microseconds),
        ("nanoseconds", time.nanoseconds),
        ("fractional seconds", time.fractional_seconds),
        ("total days", time.total_days()),
        ("total hours", time.total_hours()),
    ]
    for name, field_value in rows:
        table.add_row(name, "-" if field_value is None else str(field_value))
    console.print(table)


@cli.command()
@click.argument("template")
def validate(template: str) -> None:
    """Check that TEMPLATE is a valid duration template."""
    from durfmt.formatting import validate_template

    try:
        fields = validate_template(template)
    except DurfmtError as e:
        _fail(e)
    log.debug("Template %r uses fields %s", template, fields)
    console.print(f"[green]Template is valid[/green] ({len(fields)} directive(s))")
