import sys
import argparse
import asyncio
from pathlib import Path
from typing import List, Optional

from quiniela.logging.setup import setup_logging
from quiniela.config.settings import settings

setup_logging()

from loguru import logger

from quiniela.models.enums import TextOrigin
from quiniela.models.jornada_import import JornadaImport
from quiniela.models.match import RawText
from quiniela.models.results import JornadaResults
from quiniela.parsing.match_extractor import get_extractor
from quiniela.scrapers.base_scraper import ScraperError
from quiniela.scrapers.quiniela_web_scraper import QuinielaWebScraper
from quiniela.services.jornada_import import build_jornada_import

from rich import print
from rich.panel import Panel
from rich.table import Table


def render_jornada(jornada: JornadaImport) -> None:
    table = Table(title=f"Jornada ({jornada.origin.value})")
    table.add_column("#", justify="right")
    table.add_column("Local")
    table.add_column("Visitante")
    for position, slot in enumerate(jornada.matches, start=1):
        label = "P15" if slot.pleno else str(position)
        table.add_row(label, slot.home_team or "-", slot.away_team or "-")
    print(table)
    style = "green" if jornada.complete else "yellow"
    print(Panel(jornada.message, border_style=style))


def render_results(results: List[JornadaResults]) -> None:
    if not results:
        print(Panel("No se encontraron resultados.", border_style="yellow"))
        return
    table = Table(title="Resultados")
    table.add_column("Jornada", justify="right")
    table.add_column("1X2 (1-14)")
    table.add_column("Pleno al 15")
    for jornada in results:
        signs = " ".join(sign.value for sign in jornada.result_1x2 or []) or "-"
        pleno = (
            f"{jornada.pleno_15.home.value}-{jornada.pleno_15.away.value}"
            if jornada.pleno_15
            else "-"
        )
        table.add_row(str(jornada.number or "última"), signs, pleno)
    print(table)


def import_from_file(path: Path, origin: TextOrigin) -> JornadaImport:
    """Reads OCR text or a saved results page and builds the import table."""
    text = path.read_text(encoding="utf-8")
    logger.info(f"Read {len(text)} chars from {path} ({origin.value})")
    pairs = get_extractor().parse(RawText(text=text, origin=origin))
    return build_jornada_import(pairs, origin)


async def fetch_from_web(command: str, url: Optional[str]) -> None:
    scraper = QuinielaWebScraper(url=url)
    try:
        if command == "web":
            render_jornada(await scraper.fetch_teams())
        else:
            render_results(await scraper.fetch_results())
    finally:
        await scraper.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract the 15 quiniela matches from OCR text or the results page."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    text_parser = subparsers.add_parser("text", help="Parse OCR text from a file")
    text_parser.add_argument("file", type=Path)

    html_parser = subparsers.add_parser("html", help="Parse a saved results page")
    html_parser.add_argument("file", type=Path)

    for name, help_text in (
        ("web", "Fetch this jornada's teams from the results page"),
        ("results", "Fetch 1X2 results and Pleno al 15 per jornada"),
    ):
        web_parser = subparsers.add_parser(name, help=help_text)
        web_parser.add_argument(
            "--url", default=None, help=f"Results page URL (default: {settings.quiniela_url})"
        )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.command in ("text", "html"):
            origin = TextOrigin.OCR if args.command == "text" else TextOrigin.HTML
            render_jornada(import_from_file(args.file, origin))
        else:
            asyncio.run(fetch_from_web(args.command, args.url))
    except FileNotFoundError as e:
        logger.error(f"Input file not found: {e.filename}")
        return 1
    except ScraperError as e:
        logger.error(f"Could not read the results page: {e}")
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
