"""CLI entry point for classdsl."""

import logging
import sys

import click

from classdsl.config import FORMATS, OutputConfig
from classdsl.parsers import parse
from classdsl.renderers import get_renderer

log = logging.getLogger(__name__)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--format", "-f", "format", type=click.Choice(FORMATS), default="json", help="Output format")
@click.option("--indent", "-i", "indent", type=int, default=2, help="JSON indentation")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
def main(input: str | None, format: str, indent: int, output: str | None, debug: bool) -> None:
    """Class diagram notation to JSON or canonical text."""
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING)
    config = OutputConfig(format=format, indent=indent)

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        diagram = parse(text)
    except ValueError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    log.debug("Rendering %d classifiers, %d edges as %s", len(diagram.classifiers), len(diagram.edges), format)
    rendered = get_renderer(config.format, config.indent).render(diagram)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
