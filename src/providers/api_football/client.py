from __future__ import annotations

import re
import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode

import requests

from core.config import DEFAULT_TIMEOUT, Settings
from core.logging import get_logger
from .envelope import ResultEnvelope
from .exceptions import DecodeError, InvalidHeaderValue, TransportError
from .fixtures_data import FixtureResponse, decode_fixtures
from .parameters import ClubInfo, QueryPair
from .teams_data import TeamResponse, decode_teams

log = get_logger(__name__)

API_KEY_HEADER = "x-rapidapi-key"

# Primo carattere visibile, poi ASCII stampabile, spazi o tab (niente CR/LF)
_HEADER_VALUE_RE = re.compile(r"(?:[\x21-\x7e][\t\x20-\x7e]*)?")

# Errori sollevati prima dell'invio: nessun URL effettivamente contattato
_URL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
)


class ApiCommand(str, Enum):
    FIXTURES = "fixtures"
    TEAMS = "teams"

    def __str__(self) -> str:
        return self.value


_DECODERS: Dict[ApiCommand, Callable[[Any], ResultEnvelope]] = {
    ApiCommand.FIXTURES: decode_fixtures,
    ApiCommand.TEAMS: decode_teams,
}


def mask_key(api_key: str) -> str:
    if not api_key:
        return "(vuota)"
    return api_key[:4] + "…"


def build_headers(api_key: str) -> Dict[str, str]:
    """Header di autenticazione. Solleva InvalidHeaderValue se la chiave non è un valore header valido."""
    if not _HEADER_VALUE_RE.fullmatch(api_key):
        raise InvalidHeaderValue(f"invalid api key header value ({mask_key(api_key)})")
    return {API_KEY_HEADER: api_key}


def build_url(
    api_endpoint: str,
    api_path: str,
    command: str,
    options: List[QueryPair],
) -> str:
    """
    https://{endpoint}/{path}?{command}&k=v...

    Con `api_path` vuoto il comando diventa il path (layout diretto api-sports):
    https://{endpoint}/{command}?k=v...
    """
    endpoint = api_endpoint.strip().rstrip("/")
    path = api_path.strip("/")
    query = urlencode(options)
    if not path:
        return f"https://{endpoint}/{command}?{query}"
    parts = [p for p in (command, query) if p]
    return f"https://{endpoint}/{path}?{'&'.join(parts)}"


class FootballApi:
    """
    Client per l'API api-football.com (api-sports v3).

    Una sola GET per chiamata: nessun retry, backoff o cache. Gli errori di rete
    o di status diventano TransportError, quelli di decodifica DecodeError.
    """

    def __init__(
        self,
        api_key: str,
        api_endpoint: str,
        api_path: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.api_endpoint = api_endpoint
        self.api_path = api_path
        self._timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings, api_key: Optional[str] = None) -> "FootballApi":
        return cls(
            api_key or settings.api_key or "",
            settings.api_endpoint,
            settings.api_path,
            timeout=settings.api_timeout,
        )

    def with_key(self, api_key: str) -> "FootballApi":
        return FootballApi(
            api_key,
            self.api_endpoint,
            self.api_path,
            timeout=self._timeout,
            session=self._session,
        )

    def with_endpoint(self, api_endpoint: str) -> "FootballApi":
        return FootballApi(
            self.api_key,
            api_endpoint,
            self.api_path,
            timeout=self._timeout,
            session=self._session,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FootballApi):
            return NotImplemented
        return (self.api_key, self.api_endpoint, self.api_path) == (
            other.api_key,
            other.api_endpoint,
            other.api_path,
        )

    def __hash__(self) -> int:
        return hash((self.api_key, self.api_endpoint, self.api_path))

    def __repr__(self) -> str:
        return f"FootballApi(key={mask_key(self.api_key)},endpoint={self.api_endpoint})"

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "FootballApi":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get_api_options(self, club: ClubInfo) -> List[QueryPair]:
        return club.get_param_options()

    def get_fixture_data(self, club: ClubInfo) -> "ResultEnvelope[FixtureResponse]":
        return self.fetch(club, ApiCommand.FIXTURES)

    def get_team_data(self, club: ClubInfo) -> "ResultEnvelope[TeamResponse]":
        return self.fetch(club, ApiCommand.TEAMS)

    def fetch(self, club: ClubInfo, command: ApiCommand) -> ResultEnvelope:
        payload = self.run_api(command, self.get_api_options(club))
        try:
            return _DECODERS[command](payload)
        except DecodeError as e:
            log.error("api_football decode failed command=%s: %s", command, e, extra={"command": str(command)})
            raise

    def run_api(self, command: ApiCommand, options: List[QueryPair]) -> Any:
        """Esegue la GET e ritorna il JSON grezzo."""
        headers = build_headers(self.api_key)
        url = build_url(self.api_endpoint, self.api_path, str(command), options)
        log.debug("api_football GET %s params=%s", url, options, extra={"command": str(command)})

        start = time.perf_counter()
        try:
            resp = self._session.get(url, headers=headers, timeout=self._timeout)
        except _URL_ERRORS as e:
            log.error("Richiesta API non valida %s: %s", url, e)
            raise TransportError(f"Invalid API request: {e}") from e
        except requests.RequestException as e:
            elapsed = (time.perf_counter() - start) * 1000
            log.error("Errore rete %s dopo %.1fms: %s", url, elapsed, e, extra={"url": url})
            raise TransportError(f"Network request error: {e}", url=url) from e

        elapsed = (time.perf_counter() - start) * 1000
        if not 200 <= resp.status_code < 300:
            log.error(
                "Status %s %s (%.1fms) body=%s",
                resp.status_code,
                url,
                elapsed,
                (resp.text or "")[:300],
                extra={"url": url, "status": resp.status_code, "latency_ms": round(elapsed, 2)},
            )
            raise TransportError(
                f"HTTP status {resp.status_code} for {url}",
                status_code=resp.status_code,
                url=url,
            )
        log.debug(
            "OK %s %s %.1fms",
            url,
            resp.status_code,
            elapsed,
            extra={"url": url, "status": resp.status_code, "latency_ms": round(elapsed, 2)},
        )

        try:
            return resp.json()
        except ValueError as e:
            log.error("Risposta non valida (non JSON) status=%s url=%s", resp.status_code, url)
            raise DecodeError(f"Risposta non valida (non JSON) status={resp.status_code}") from e


__all__ = ["API_KEY_HEADER", "ApiCommand", "FootballApi", "build_headers", "build_url"]
