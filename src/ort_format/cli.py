"""Command-line interface for ORT <-> JSON conversion."""

import logging
import sys
from typing import Optional, Tuple
import click
from .converter import OrtConverter
from .error_handler import ErrorHandler
from .types import ConversionDirection


USAGE = {
    ConversionDirection.DECODE: "Usage: ort2json <file.ort> [-o <output_dir>]",
    ConversionDirection.ENCODE: "Usage: json2ort <file.json> [-o <output_dir>]",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _run(direction: ConversionDirection, input_files: Tuple[str, ...],
         output: Optional[str], verbose: bool, json_indent: Optional[int] = 2) -> None:
    """Convert every input file, then exit 1 if any of them failed."""
    _configure_logging(verbose)

    if not input_files:
        click.echo(USAGE[direction], err=True)
        sys.exit(1)

    converter = OrtConverter(json_indent=json_indent)
    error_handler = ErrorHandler()
    results = converter.convert_batch(input_files, direction, output)

    failed = 0
    for result in results:
        if result.success:
            click.echo(f"✅ {result.input_path} -> {result.output_path}")
            continue

        failed += 1
        click.echo(f"❌ Failed to convert {result.input_path}:", err=True)
        if result.exception is not None:
            click.echo(error_handler.format_error(result.exception, color=True), err=True)
        else:
            for error in result.errors or []:
                click.echo(f"   • {error}", err=True)

    if failed:
        sys.exit(1)


input_files_argument = click.argument('input_files', nargs=-1, type=click.Path(path_type=str))
output_option = click.option('--output', '-o', default=None,
                             help='Output directory (default: next to each input file)')
verbose_option = click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
indent_option = click.option('--indent', default=2, show_default=True,
                             help='JSON indentation; 0 writes compact JSON')


@click.group()
@click.version_option(version="1.0.0")
def main():
    """ORT - Convert between ORT tables and JSON documents."""
    pass


@main.command()
@input_files_argument
@output_option
@indent_option
@verbose_option
def decode(input_files: Tuple[str, ...], output: Optional[str], indent: int, verbose: bool):
    """Decode .ort files into .json files."""
    _run(ConversionDirection.DECODE, input_files, output, verbose, indent or None)


@main.command()
@input_files_argument
@output_option
@verbose_option
def encode(input_files: Tuple[str, ...], output: Optional[str], verbose: bool):
    """Encode .json files into .ort files."""
    _run(ConversionDirection.ENCODE, input_files, output, verbose)


@click.command()
@click.version_option(version="1.0.0")
@input_files_argument
@output_option
@indent_option
@verbose_option
def ort2json(input_files: Tuple[str, ...], output: Optional[str], indent: int, verbose: bool):
    """Convert .ort files to .json files."""
    _run(ConversionDirection.DECODE, input_files, output, verbose, indent or None)


@click.command()
@click.version_option(version="1.0.0")
@input_files_argument
@output_option
@verbose_option
def json2ort(input_files: Tuple[str, ...], output: Optional[str], verbose: bool):
    """Convert .json files to .ort files."""
    _run(ConversionDirection.ENCODE, input_files, output, verbose)


if __name__ == '__main__':
    main()
