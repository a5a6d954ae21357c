from typing import Optional


class FootballScoreError(Exception):
    """Base di tutti gli errori sollevati dal client api-football."""


class InvalidInputError(FootballScoreError):
    """Input non valido (chiave API mancante, club id o conteggio `next` non positivi). Correggibile dall'utente."""


class InvalidHeaderValue(InvalidInputError):
    """La chiave API contiene caratteri non ammessi in un header HTTP."""


class TransportError(FootballScoreError):
    """Errore di rete o status HTTP non 2xx. Non viene mai ritentato."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class DecodeError(FootballScoreError):
    """Payload non decodificabile: JSON invalido, campo obbligatorio mancante o forma inattesa."""
