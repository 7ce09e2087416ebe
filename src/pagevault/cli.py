from pathlib import Path

import fitz  # type: ignore[import]
import typer

from .config import Settings
from .export.coordinator import ExportStatus
from .export.trigger import RecordingNotifier
from .logging import get_logger
from .replay import replay_directory

app = typer.Typer(help="pagevault – export captured viewer pages as one PDF", no_args_is_help=True)


@app.command()
def export(
    directory: Path = typer.Argument(..., help="Directory holding page snapshots named <prefix>_<n>.<ext>"),
    out: Path = typer.Option(Path("output"), "--out", "-o", help="Output directory for the PDF"),
    name: str = typer.Option("ebook.pdf", "--name", "-n", help="Output file name"),
    prefix: str = typer.Option("mainPageContainer", help="Page region name prefix"),
    quality: int = typer.Option(92, min=1, max=100, help="JPEG quality for page rasters"),
    settle_timeout: float = typer.Option(5.0, help="Seconds to wait for in-flight captures before exporting"),
) -> None:
    """
    Replay page snapshots from a directory and export them in page order.

    Every page is sized like the lowest-numbered page.
    """
    logger = get_logger(__name__)

    if not directory.is_dir():
        logger.error(f"Snapshot directory not found: {directory}")
        raise typer.Exit(code=2)

    settings = Settings(
        output_dir=out,
        output_name=name,
        region_prefix=prefix,
        jpeg_quality=quality,
        settle_timeout=settle_timeout,
    )
    notifier = RecordingNotifier()
    result = replay_directory(directory, settings, notifier=notifier)

    if result.status is ExportStatus.EMPTY:
        for message in notifier.messages:
            typer.echo(message, err=True)
        raise typer.Exit(code=1)
    if result.status is ExportStatus.FAILED:
        logger.error(f"Export failed: {result.error}")
        raise typer.Exit(code=1)

    geometry = result.geometry
    typer.echo(f"Exported {result.page_count} pages to {result.path}")
    if geometry is not None:
        typer.echo(f"Page size: {geometry.width:.0f}x{geometry.height:.0f}pt ({geometry.orientation})")


@app.command()
def inspect(
    pdf_path: Path = typer.Argument(..., exists=True, readable=True, help="Exported PDF to inspect"),
) -> None:
    """Print the page count and page sizes of an exported PDF."""
    try:
        doc = fitz.open(pdf_path)
    except Exception as exc:
        typer.echo(f"Cannot open PDF: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    with doc:
        typer.echo(f"Pages: {doc.page_count}")
        for page in doc:
            rect = page.rect
            typer.echo(f"  {page.number + 1}: {rect.width:.0f}x{rect.height:.0f}pt")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
