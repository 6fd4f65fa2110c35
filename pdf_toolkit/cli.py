"""
Command-line interface for PDF Toolkit.
"""

import functools
import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeRemainingColumn
from rich.table import Table

from pdf_toolkit import __version__
from pdf_toolkit.archive import archive_names, write_archive
from pdf_toolkit.compressor import compress_pdf, get_compression_info
from pdf_toolkit.config import (
    COMPRESSION_LEVELS,
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_OUTPUT_DIR,
    ENV_PREFIX,
    WatermarkStyle,
)
from pdf_toolkit.converter import image_to_pdf, images_to_pdf, text_to_pdf
from pdf_toolkit.document import get_pdf_info
from pdf_toolkit.exceptions import PDFToolkitException, ValidationError
from pdf_toolkit.merger import DEFAULT_MERGED_NAME, merge_documents
from pdf_toolkit.metadata import METADATA_KEYS, edit_metadata
from pdf_toolkit.organizer import EditingSession
from pdf_toolkit.page_order import PageOrderManager
from pdf_toolkit.ranges import format_pages
from pdf_toolkit.security import remove_password
from pdf_toolkit.splitter import PDFSplitter
from pdf_toolkit.types import InputFile
from pdf_toolkit.utils import format_file_size, set_log_level
from pdf_toolkit.watermark import add_watermark, parse_hex_color

console = Console()

TEXT_SUFFIXES = {".txt", ".text", ".md"}

output_dir_option = click.option(
    '--output-dir', '-o',
    default=DEFAULT_OUTPUT_DIR,
    help='Output directory',
    type=click.Path(file_okay=False),
)
password_option = click.option(
    '--password',
    default=None,
    help='Password for encrypted PDFs',
    type=str,
)
zip_option = click.option(
    '--zip', 'zip_path',
    default=None,
    help='Write all outputs into this ZIP archive instead of a directory',
    type=click.Path(dir_okay=False),
)


def handle_errors(func):
    """Print toolkit errors in red and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (PDFToolkitException, OSError) as e:
            console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
            sys.exit(1)

    return wrapper


def _print_outputs(documents, output_dir, zip_path):
    """Write ``documents`` to ``output_dir`` or into a single archive."""

    names = archive_names(documents)
    if zip_path:
        archive = write_archive(documents, zip_path)
        console.print(f"\n[bold green]✓ Successfully created {len(documents)} file(s)[/bold green]")
        console.print(f"[dim]Archive: {os.path.abspath(archive)}[/dim]")
    else:
        for document, name in zip(documents, names):
            document.write_to(output_dir, name)
        console.print(f"\n[bold green]✓ Successfully created {len(documents)} file(s)[/bold green]")
        console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]")

    console.print("\n[bold]Created files:[/bold]")
    sample_size = min(10, len(names))
    for name in names[:sample_size]:
        console.print(f"  • {name}")
    if len(names) > sample_size:
        console.print(f"  ... and {len(names) - sample_size} more")
    console.print()


def _print_single(document, output_dir):
    path = document.write_to(output_dir)
    console.print(f"\n[bold green]✓ Successfully created:[/bold green] {path}")
    console.print(f"[dim]Output size: {format_file_size(document.size)}[/dim]")
    console.print()


def _progress():
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        console=console,
    )


def _parse_number(value, step):
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Invalid number '{value}' in edit step '{step}'.") from None


def _parse_position(value, step):
    return _parse_number(value, step) - 1


def _parse_passwords(values):
    """Map 'NAME=PASSWORD' pairs to a dict keyed by input filename."""
    passwords = {}
    for value in values:
        name, sep, password = value.partition("=")
        if not sep or not name:
            raise ValidationError(f"Invalid password '{value}'. Expected FILENAME=PASSWORD.")
        passwords[os.path.basename(name)] = password
    return passwords


def apply_edit_step(pages: PageOrderManager, step: str) -> None:
    """
    Apply one textual edit step to ``pages``.

    Positions and page numbers are 1-based. Supported steps:
    ``move FROM TO``, ``up POS``, ``down POS``, ``sort asc|desc``,
    ``remove POS``, ``rotate PAGE [DEGREES]`` and ``reset``.
    """
    parts = step.split()
    if not parts:
        raise ValidationError("Empty edit step.")
    action, args = parts[0].lower(), parts[1:]

    if action == "move" and len(args) == 2:
        pages.move_slot(_parse_position(args[0], step), _parse_position(args[1], step))
    elif action == "up" and len(args) == 1:
        pages.move_up(_parse_position(args[0], step))
    elif action == "down" and len(args) == 1:
        pages.move_down(_parse_position(args[0], step))
    elif action == "sort" and len(args) == 1 and args[0].lower() in ("asc", "desc"):
        if args[0].lower() == "asc":
            pages.sort_ascending()
        else:
            pages.sort_descending()
    elif action == "remove" and len(args) == 1:
        pages.remove_slot(_parse_position(args[0], step))
    elif action == "rotate" and len(args) in (1, 2):
        degrees = _parse_number(args[1], step) if len(args) == 2 else 90
        pages.rotate_page(_parse_position(args[0], step), degrees)
    elif action == "reset" and not args:
        pages.reset()
    else:
        raise ValidationError(
            f"Invalid edit step: '{step}'. Expected one of: move FROM TO, up POS, down POS, "
            "sort asc|desc, remove POS, rotate PAGE [DEGREES], reset."
        )


@click.group(context_settings={"auto_envvar_prefix": ENV_PREFIX})
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    PDF Toolkit CLI - Split, merge, reorganize and convert PDF files.
    """
    if verbose:
        set_log_level(logging.DEBUG)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@password_option
@handle_errors
def show_info(input_pdf, password):
    """
    Display information about a PDF file.

    Example:

        pdf-toolkit info input.pdf
    """
    info = get_pdf_info(InputFile.from_path(input_pdf), password=password)

    table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("File Path", os.path.abspath(input_pdf))
    table.add_row("File Size", format_file_size(info.file_size))
    table.add_row("Number of Pages", str(info.num_pages))
    table.add_row("Encrypted", "Yes" if info.is_encrypted else "No")

    for label, value in (
        ("Title", info.title),
        ("Author", info.author),
        ("Subject", info.subject),
        ("Keywords", info.keywords),
        ("Creator", info.creator),
        ("Producer", info.producer),
    ):
        if value:
            table.add_row(label, value)

    console.print()
    console.print(table)
    console.print()


@cli.command(name="split")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--ranges', '-r',
    required=True,
    help="Page ranges (e.g., '1-3,5,7-9'); one output file per range",
    type=str,
)
@output_dir_option
@zip_option
@password_option
@handle_errors
def split(input_pdf, ranges, output_dir, zip_path, password):
    """
    Split a PDF into one file per comma-separated range.

    Examples:

        pdf-toolkit split input.pdf -r '1-5,6-10'

        pdf-toolkit split input.pdf -r '1-3,2-4' --zip parts.zip
    """
    splitter = PDFSplitter(InputFile.from_path(input_pdf), password=password)
    console.print(f"\n[bold cyan]Splitting {splitter.num_pages} page(s) by '{ranges}'...[/bold cyan]")

    with _progress() as progress:
        task = progress.add_task("Processing ranges", total=None)

        def update_progress(current, total):
            progress.update(task, completed=current, total=total)

        documents = splitter.split_by_ranges(ranges, progress_callback=update_progress)

    _print_outputs(documents, output_dir, zip_path)


@cli.command(name="burst")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--pages', '-p',
    default="",
    help="Pages to burst (e.g., '1,3,5-7'); all pages by default",
    type=str,
)
@output_dir_option
@zip_option
@password_option
@handle_errors
def burst(input_pdf, pages, output_dir, zip_path, password):
    """
    Split a PDF into single-page files.

    Examples:

        pdf-toolkit burst input.pdf

        pdf-toolkit burst input.pdf -p '2-4' --zip pages.zip
    """
    splitter = PDFSplitter(InputFile.from_path(input_pdf), password=password)
    console.print(f"\n[bold cyan]Bursting {os.path.basename(input_pdf)}...[/bold cyan]")

    with _progress() as progress:
        task = progress.add_task("Splitting pages", total=None)

        def update_progress(current, total):
            progress.update(task, completed=current, total=total)

        documents = splitter.split_to_pages(pages, progress_callback=update_progress)

    _print_outputs(documents, output_dir, zip_path)


@cli.command(name="extract")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--pages', '-p',
    required=True,
    help="Pages to extract (e.g., '1,3,5,7-10')",
    type=str,
)
@click.option(
    '--output-name', '-n',
    default=None,
    help='Custom output filename',
    type=str,
)
@output_dir_option
@password_option
@handle_errors
def extract(input_pdf, pages, output_name, output_dir, password):
    """
    Extract specific pages into a single new PDF.

    Examples:

        pdf-toolkit extract input.pdf -p '1,3,5'

        pdf-toolkit extract input.pdf --pages '1-5,10' -n selected.pdf
    """
    splitter = PDFSplitter(InputFile.from_path(input_pdf), password=password)
    document = splitter.extract_pages(pages, output_name)
    _print_single(document, output_dir)


@cli.command(name="merge")
@click.argument('input_pdfs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output-name', '-n',
    default=DEFAULT_MERGED_NAME,
    help='Merged output filename',
    type=str,
)
@click.option('--bookmarks', is_flag=True, help='Add an outline entry per input file')
@click.option(
    '--password', 'passwords',
    multiple=True,
    help="Password for an encrypted input as 'FILENAME=PASSWORD' (repeatable)",
    type=str,
)
@output_dir_option
@handle_errors
def merge(input_pdfs, output_name, bookmarks, passwords, output_dir):
    """
    Merge PDF files in the given order.

    Examples:

        pdf-toolkit merge a.pdf b.pdf c.pdf -n combined.pdf

        pdf-toolkit merge a.pdf locked.pdf --password locked.pdf=secret
    """
    sources = [InputFile.from_path(path) for path in input_pdfs]
    console.print(f"\n[bold cyan]Merging {len(sources)} file(s)...[/bold cyan]")
    document = merge_documents(
        sources,
        output_name,
        passwords=_parse_passwords(passwords),
        bookmarks=bookmarks,
    )
    _print_single(document, output_dir)


@cli.command(name="organize")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--edit', '-e', 'edits',
    multiple=True,
    help="Edit step, applied in order (e.g., 'move 3 1', 'remove 2', 'rotate 1 180')",
    type=str,
)
@click.option(
    '--output-name', '-n',
    default=None,
    help='Custom output filename',
    type=str,
)
@output_dir_option
@password_option
@handle_errors
def organize(input_pdf, edits, output_name, output_dir, password):
    """
    Reorder, remove and rotate pages.

    Examples:

        pdf-toolkit organize input.pdf -e 'move 5 1' -e 'remove 2'

        pdf-toolkit organize input.pdf -e 'sort desc' -e 'rotate 1 90'
    """
    session = EditingSession()
    pages = session.load(InputFile.from_path(input_pdf), password=password)
    for step in edits:
        apply_edit_step(pages, step)

    order = ', '.join(str(pages.page_at(slot) + 1) for slot in range(len(pages)))
    console.print(f"[dim]Page order: {order}[/dim]")
    rotated = sorted(page for page, angle in pages.attributes().items() if angle)
    if rotated:
        console.print(f"[dim]Rotated pages: {format_pages(rotated)}[/dim]")

    document = session.export(output_name)
    console.print(f"\n[bold green]{session.summary()}[/bold green]")
    _print_single(document, output_dir)


@cli.command(name="compress")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--level', '-l',
    default=DEFAULT_COMPRESSION_LEVEL,
    type=click.Choice(list(COMPRESSION_LEVELS), case_sensitive=False),
    help='Compression preset',
)
@click.option('--estimate', is_flag=True, help='Only show estimated sizes for every preset')
@output_dir_option
@password_option
@handle_errors
def compress(input_pdf, level, estimate, output_dir, password):
    """
    Reduce the size of a PDF.

    Examples:

        pdf-toolkit compress input.pdf --level extreme

        pdf-toolkit compress input.pdf --estimate
    """
    source = InputFile.from_path(input_pdf)

    if estimate:
        info = get_compression_info(source)
        table = Table(title=f"Estimated sizes: {source.name}")
        table.add_column("Level", style="cyan")
        table.add_column("Estimated Size", style="green")
        table.add_row("original", format_file_size(info.original_size))
        for name, size in info.estimated_sizes.items():
            table.add_row(name, format_file_size(size))
        console.print()
        console.print(table)
        console.print()
        return

    result = compress_pdf(source, level, password=password)
    path = result.output.write_to(output_dir)

    table = Table(title="Compression Result", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Level", result.level)
    table.add_row("Original Size", format_file_size(result.original_size))
    table.add_row("Compressed Size", format_file_size(result.compressed_size))
    table.add_row("Reduction", f"{result.reduction_percent}%")

    console.print()
    console.print(table)
    console.print(f"\n[bold green]✓ Successfully created:[/bold green] {path}")
    console.print()


@cli.command(name="watermark")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--text', '-t', required=True, help='Watermark text', type=str)
@click.option('--font-size', default=WatermarkStyle.font_size, show_default=True, type=int)
@click.option('--color', default="#808080", show_default=True, help="Text colour as '#rrggbb'", type=str)
@click.option('--opacity', default=WatermarkStyle.opacity, show_default=True, type=float)
@click.option('--angle', default=WatermarkStyle.angle, show_default=True, type=float)
@output_dir_option
@password_option
@handle_errors
def watermark(input_pdf, text, font_size, color, opacity, angle, output_dir, password):
    """
    Stamp a text watermark on every page.

    Example:

        pdf-toolkit watermark input.pdf -t CONFIDENTIAL --opacity 0.2 --angle 45
    """
    style = WatermarkStyle(
        font_size=font_size,
        color=parse_hex_color(color),
        opacity=opacity,
        angle=angle,
    )
    document = add_watermark(InputFile.from_path(input_pdf), text, style, password=password)
    _print_single(document, output_dir)


@cli.command(name="metadata")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--title', default=None, type=str)
@click.option('--author', default=None, type=str)
@click.option('--subject', default=None, type=str)
@click.option('--keywords', default=None, help='Comma-separated keywords', type=str)
@click.option('--producer', default=None, type=str)
@click.option('--creator', default=None, type=str)
@output_dir_option
@password_option
@handle_errors
def metadata(input_pdf, output_dir, password, **fields):
    """
    Edit the document information of a PDF.

    Example:

        pdf-toolkit metadata input.pdf --title 'Report' --keywords 'q1, finance'
    """
    updates = {key: value for key, value in fields.items() if key in METADATA_KEYS and value is not None}
    if not updates:
        raise ValidationError("Nothing to update. Pass at least one metadata option.")
    document = edit_metadata(InputFile.from_path(input_pdf), updates, password=password)
    _print_single(document, output_dir)


@cli.command(name="unlock")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--password',
    prompt=True,
    hide_input=True,
    help='Password of the encrypted PDF',
    type=str,
)
@output_dir_option
@handle_errors
def unlock(input_pdf, password, output_dir):
    """
    Remove the password from an encrypted PDF.

    Example:

        pdf-toolkit unlock secret.pdf --password hunter2
    """
    document = remove_password(InputFile.from_path(input_pdf), password)
    _print_single(document, output_dir)


@cli.command(name="convert")
@click.argument('inputs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--combine', '-c',
    default=None,
    help='Combine all images into one PDF with this filename',
    type=str,
)
@output_dir_option
@zip_option
@handle_errors
def convert(inputs, combine, output_dir, zip_path):
    """
    Convert JPEG/PNG images and plain text files to PDF.

    Examples:

        pdf-toolkit convert photo.jpg notes.txt

        pdf-toolkit convert scan1.png scan2.png --combine scans.pdf
    """
    sources = [InputFile.from_path(path) for path in inputs]

    if combine:
        texts = [source.name for source in sources if Path(source.name).suffix.lower() in TEXT_SUFFIXES]
        if texts:
            raise ValidationError(f"Only images can be combined, got: {', '.join(texts)}.")
        _print_single(images_to_pdf(sources, combine), output_dir)
        return

    documents = []
    for source in sources:
        if Path(source.name).suffix.lower() in TEXT_SUFFIXES:
            documents.append(text_to_pdf(source))
        else:
            documents.append(image_to_pdf(source))
    _print_outputs(documents, output_dir, zip_path)


def main():
    cli()


if __name__ == '__main__':
    main()
