"""Provider registry: chamber token -> scraper and importer classes."""

from dataclasses import dataclass
from enum import Enum

from ar_vote_scraper.errors import UnknownProviderError
from ar_vote_scraper.importer import VoteImporter
from ar_vote_scraper.providers.diputados import DiputadosImporter, DiputadosScraper
from ar_vote_scraper.providers.senadores import SenadoresImporter, SenadoresScraper
from ar_vote_scraper.scraper import VoteScraper


class Provider(str, Enum):
    DIPUTADOS = "diputados"
    SENADORES = "senadores"


ALIASES = {
    "lower-chamber": Provider.DIPUTADOS,
    "deputies": Provider.DIPUTADOS,
    "upper-chamber": Provider.SENADORES,
    "senators": Provider.SENADORES,
}


@dataclass(frozen=True)
class ProviderBundle:
    """Everything a command needs to work with one chamber."""

    provider: Provider
    label: str
    scraper_cls: type[VoteScraper]
    importer_cls: type[VoteImporter]


PROVIDERS: dict[Provider, ProviderBundle] = {
    Provider.DIPUTADOS: ProviderBundle(
        provider=Provider.DIPUTADOS,
        label="Cámara de Diputados",
        scraper_cls=DiputadosScraper,
        importer_cls=DiputadosImporter,
    ),
    Provider.SENADORES: ProviderBundle(
        provider=Provider.SENADORES,
        label="Senado",
        scraper_cls=SenadoresScraper,
        importer_cls=SenadoresImporter,
    ),
}


def provider_tokens() -> list[str]:
    return [p.value for p in Provider] + list(ALIASES)


def resolve_provider(token: str) -> ProviderBundle:
    """Look up a provider by token or alias (case-insensitive)."""
    key = token.strip().lower()
    provider = ALIASES.get(key)
    if provider is None:
        try:
            provider = Provider(key)
        except ValueError:
            raise UnknownProviderError(
                f"Unknown provider '{token}'. Choose one of: {', '.join(provider_tokens())}"
            ) from None
    return PROVIDERS[provider]
