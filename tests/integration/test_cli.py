"""
Integration tests for the command-line interface.
"""

import json

import httpx
import pytest
from click.testing import CliRunner

from primescraper import cli as cli_module
from primescraper.scraper import Scraper


@pytest.fixture
def run_cli(monkeypatch):
    """Invoke the CLI with the network replaced by ``handler``."""

    def _run(args, handler):
        def scraper_factory(config):
            return Scraper(config, transport=httpx.MockTransport(handler))

        monkeypatch.setattr(cli_module, "Scraper", scraper_factory)
        monkeypatch.setattr(cli_module, "configure_logging", lambda config: None)
        return CliRunner().invoke(cli_module.cli, args, obj={})

    return _run


@pytest.mark.integration
class TestScrapeCommand:
    def test_prints_movie_json(self, run_cli, movie_page):
        result = run_cli(["scrape", "B07ZPC9QD4"], lambda request: httpx.Response(200, text=movie_page))

        assert result.exit_code == 0
        movie = json.loads(result.output)
        assert movie["title"] == "Movie X"
        assert movie["similar_ids"] == ["B07ID00001", "B07ID00002", "B07ID00003"]

    def test_invalid_item_id(self, run_cli):
        def handler(request):
            raise AssertionError("no request expected")

        result = run_cli(["scrape", "bad-id"], handler)

        assert result.exit_code == cli_module.EXIT_INVALID_ITEM_ID

    def test_fetch_failure(self, run_cli):
        result = run_cli(["scrape", "B0TEST"], lambda request: httpx.Response(404))
        assert result.exit_code == cli_module.EXIT_FETCH_FAILED

    def test_not_found(self, run_cli, unrelated_page):
        result = run_cli(["scrape", "B0TEST"], lambda request: httpx.Response(200, text=unrelated_page))
        assert result.exit_code == cli_module.EXIT_NOT_FOUND


@pytest.mark.integration
def test_version():
    result = CliRunner().invoke(cli_module.cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
