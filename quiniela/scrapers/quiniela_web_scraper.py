from typing import List, Optional

import httpx
from loguru import logger

from quiniela.config.settings import settings
from quiniela.models.enums import TextOrigin
from quiniela.models.jornada_import import JornadaImport
from quiniela.models.results import JornadaResults
from quiniela.parsing.match_extractor import MatchListExtractor, get_extractor
from quiniela.parsing.results_parser import parse_results_by_jornada
from quiniela.services.jornada_import import build_jornada_import

from .base_scraper import BaseScraper, ScraperError


class QuinielaWebScraper(BaseScraper):
    """Reads the official quiniela results page: this week's teams and past results."""

    source = "loteriasyapuestas"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        url: Optional[str] = None,
        extractor: Optional[MatchListExtractor] = None,
    ):
        super().__init__(client)
        self.url = url or settings.quiniela_url
        self.extractor = extractor or get_extractor()

    async def fetch_page(self) -> str:
        """Downloads the results page markup."""
        logger.info(f"Fetching quiniela page from {self.url}")
        try:
            response = await self._make_request("GET", self.url)
        except httpx.RequestError as e:
            logger.error(f"Network error fetching {self.url} after retries: {e}")
            raise ScraperError(f"Could not reach {self.source}") from e
        logger.debug(f"Fetched {len(response.text)} chars from {self.url}")
        return response.text

    async def fetch_teams(self) -> JornadaImport:
        """Fetches the page and proposes this jornada's 15 matches."""
        html = await self.fetch_page()
        pairs = self.extractor.extract_from_html(html)
        if not pairs:
            logger.warning(f"No matches found on {self.url}")
        return build_jornada_import(pairs, TextOrigin.HTML)

    async def fetch_results(self) -> List[JornadaResults]:
        """Fetches the page and reads 1X2 signs and Pleno al 15 per jornada."""
        html = await self.fetch_page()
        results = parse_results_by_jornada(html)
        if not results:
            logger.warning(f"No results found on {self.url}")
        return results
