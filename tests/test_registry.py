"""
Tests for provider lookup in registry.py.

Run: uv run pytest tests/test_registry.py -v
"""

import pytest

from ar_vote_scraper.errors import ScraperError, UnknownProviderError
from ar_vote_scraper.providers.diputados import DiputadosImporter, DiputadosScraper
from ar_vote_scraper.providers.senadores import SenadoresImporter, SenadoresScraper
from ar_vote_scraper.registry import Provider, provider_tokens, resolve_provider


class TestResolveProvider:
    @pytest.mark.parametrize("token", ["diputados", "DIPUTADOS", " lower-chamber ", "deputies"])
    def test_lower_chamber(self, token):
        bundle = resolve_provider(token)
        assert bundle.provider is Provider.DIPUTADOS
        assert bundle.scraper_cls is DiputadosScraper
        assert bundle.importer_cls is DiputadosImporter

    @pytest.mark.parametrize("token", ["senadores", "Senadores", "upper-chamber", "senators"])
    def test_upper_chamber(self, token):
        bundle = resolve_provider(token)
        assert bundle.provider is Provider.SENADORES
        assert bundle.scraper_cls is SenadoresScraper
        assert bundle.importer_cls is SenadoresImporter

    def test_unknown(self):
        with pytest.raises(UnknownProviderError, match="Unknown provider 'bicameral'"):
            resolve_provider("bicameral")

    def test_unknown_is_scraper_error(self):
        with pytest.raises(ScraperError):
            resolve_provider("")

    def test_data_subdirectory_matches_token(self):
        for provider in Provider:
            bundle = resolve_provider(provider.value)
            assert bundle.scraper_cls.name == provider.value
            assert bundle.importer_cls.name == provider.value


class TestProviderTokens:
    def test_canonical_first(self):
        assert provider_tokens()[:2] == ["diputados", "senadores"]

    def test_aliases_listed(self):
        assert {"lower-chamber", "upper-chamber"} <= set(provider_tokens())
