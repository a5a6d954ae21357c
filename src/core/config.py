import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values, find_dotenv

DEFAULT_API_ENDPOINT = "v3.football.api-sports.io"
DEFAULT_API_PATH = ""
DEFAULT_CLUB_ID = 529  # Barcelona
DEFAULT_TIMEOUT = 10.0

CONFIG_FILENAME = "config.env"


class ConfigError(ValueError):
    """Sollevata quando l'ambiente o il file di configurazione contengono valori non validi."""


def _default_config_file(config_home: Optional[Union[str, Path]] = None) -> Path:
    base = config_home or os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "footballscore" / CONFIG_FILENAME


def _resolve_config_file(
    config_path: Optional[Union[str, Path]],
    config_home: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    # Ordine: path esplicito -> ./config.env -> ~/.config/footballscore/config.env
    candidate = Path(config_path) if config_path else Path(CONFIG_FILENAME)
    if candidate.exists():
        return candidate
    fallback = _default_config_file(config_home)
    if fallback.exists():
        return fallback
    return None


def _load_values(
    environ: Optional[Mapping[str, str]],
    config_path: Optional[Union[str, Path]],
    config_home: Optional[Union[str, Path]],
) -> Dict[str, Optional[str]]:
    values: Dict[str, Optional[str]] = {}
    config_file = _resolve_config_file(config_path, config_home)
    if config_file is not None:
        values.update(dotenv_values(config_file))
    if environ is None:
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            values.update(dotenv_values(dotenv_path))
        environ = os.environ
    values.update(environ)
    return values


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    api_endpoint: str = DEFAULT_API_ENDPOINT
    api_path: str = DEFAULT_API_PATH
    club_id: int = DEFAULT_CLUB_ID
    api_timeout: float = DEFAULT_TIMEOUT
    log_level: str = "WARNING"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        config_path: Optional[Union[str, Path]] = None,
        config_home: Optional[Union[str, Path]] = None,
    ) -> "Settings":
        """
        Costruisce le Settings unendo (in ordine di priorità crescente):
          - il file config.env (path esplicito, cwd o ~/.config/footballscore)
          - il file .env trovato a partire dalla cwd (solo senza `environ` esplicito)
          - le variabili d'ambiente del processo, oppure la mappa `environ` passata

        La chiave API non è obbligatoria qui: la CLI può fornirla con --api-key.
        """
        values = _load_values(environ, config_path, config_home)

        def _str(name: str, default: str) -> str:
            raw = values.get(name)
            if raw is None:
                return default
            return raw.strip()

        def _int(name: str, default: int) -> int:
            raw = values.get(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError as e:
                raise ConfigError(f"Variabile {name} deve essere un intero (valore: {raw!r})") from e

        def _float(name: str, default: float) -> float:
            raw = values.get(name)
            if not raw:
                return default
            try:
                return float(raw)
            except ValueError as e:
                raise ConfigError(f"Variabile {name} deve essere un numero (valore: {raw!r})") from e

        api_key = (values.get("API_KEY") or "").strip() or None
        api_endpoint = _str("API_ENDPOINT", DEFAULT_API_ENDPOINT) or DEFAULT_API_ENDPOINT
        api_path = _str("API_PATH", DEFAULT_API_PATH).strip("/")

        club_id = _int("CLUB_ID", DEFAULT_CLUB_ID)
        if club_id <= 0:
            raise ConfigError(f"Variabile CLUB_ID deve essere positiva (valore: {club_id})")

        api_timeout = _float("API_TIMEOUT", DEFAULT_TIMEOUT)
        if api_timeout <= 0:
            api_timeout = DEFAULT_TIMEOUT

        log_level = _str("FOOTBALLSCORE_LOG_LEVEL", "WARNING").upper() or "WARNING"

        return cls(
            api_key=api_key,
            api_endpoint=api_endpoint,
            api_path=api_path,
            club_id=club_id,
            api_timeout=api_timeout,
            log_level=log_level,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def _reset_settings_cache_for_tests() -> None:
    get_settings.cache_clear()


__all__ = [
    "ConfigError",
    "Settings",
    "get_settings",
    "_reset_settings_cache_for_tests",
]
