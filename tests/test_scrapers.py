import asyncio
import json

import httpx
import pytest

from quiniela.models.enums import TextOrigin
from quiniela.parsing.match_extractor import MatchListExtractor
from quiniela.parsing.noise_tables import NoiseTables
from quiniela.scrapers.base_scraper import BaseScraper, ScraperError
from quiniela.scrapers.quiniela_web_scraper import QuinielaWebScraper

from conftest import FOURTEEN_MATCHES

PAGE_URL = "https://resultados.example/quiniela"


def teams_page():
    entries = [{"local": h, "visitante": a} for h, a in FOURTEEN_MATCHES + [("Getafe", "Mirandes")]]
    data = json.dumps({"jornada": 12, "partidos": entries})
    return f'<html><body><script type="application/json">{data}</script></body></html>'


def results_page():
    cells = "".join(f'<span class="resultado">{s}</span>' for s in "1X21X21X21X21X")
    return f"<h2>Jornada 31</h2>{cells}<p>Pleno al 15: 1-0</p>"


def run_scraper(handler, method_name):
    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        scraper = QuinielaWebScraper(
            client=client, url=PAGE_URL, extractor=MatchListExtractor(NoiseTables())
        )
        try:
            return await getattr(scraper, method_name)()
        finally:
            await scraper.close()

    return asyncio.run(run())


def test_fetch_teams_from_embedded_json():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, text=teams_page())

    jornada = run_scraper(handler, "fetch_teams")
    assert str(requests[0].url) == PAGE_URL
    assert jornada.origin == TextOrigin.HTML
    assert jornada.detected == 15
    assert jornada.matches[14].home_team == "Getafe"


def test_fetch_teams_with_nothing_on_page():
    jornada = run_scraper(lambda request: httpx.Response(200, text="<p>Mantenimiento</p>"), "fetch_teams")
    assert jornada.detected == 0
    assert len(jornada.matches) == 15


def test_fetch_results():
    results = run_scraper(lambda request: httpx.Response(200, text=results_page()), "fetch_results")
    assert len(results) == 1
    assert results[0].number == 31
    assert results[0].pleno_15.home.value == "1"


def test_client_error_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(404)

    with pytest.raises(ScraperError):
        run_scraper(handler, "fetch_page")
    assert len(calls) == 1


def test_server_error_is_retried():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(200, text=results_page())

    assert run_scraper(handler, "fetch_page") == results_page()
    assert len(calls) == 2


def test_base_scraper_requires_fetch_page():
    with pytest.raises(TypeError):
        BaseScraper()
