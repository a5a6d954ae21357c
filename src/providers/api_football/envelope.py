from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from .exceptions import DecodeError
from .parameters import ByLive, ByNext, ByTeamId, ByTeamName, QueryParameter

T = TypeVar("T")

# Ordine di ispezione dei parametri riflessi dal server
_ECHO_PRIORITY = ("live", "next", "name", "team")


# --- helper di decodifica -------------------------------------------------

def require(raw: Mapping[str, Any], key: str, context: str) -> Any:
    if key not in raw or raw[key] is None:
        raise DecodeError(f"Campo obbligatorio mancante: {context}.{key}")
    return raw[key]


def as_object(value: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DecodeError(f"{context}: atteso un oggetto JSON, ricevuto {type(value).__name__}")
    return value


def opt_object(raw: Mapping[str, Any], key: str, context: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    return as_object(value, f"{context}.{key}")


def to_int(value: Any, context: str) -> int:
    # bool è sottoclasse di int: va escluso esplicitamente
    if isinstance(value, bool):
        raise DecodeError(f"{context}: atteso intero, ricevuto bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise DecodeError(f"{context}: valore non intero {value!r}") from e
    raise DecodeError(f"{context}: atteso intero, ricevuto {type(value).__name__}")


def opt_int(raw: Mapping[str, Any], key: str, context: str) -> Optional[int]:
    value = raw.get(key)
    if value is None:
        return None
    return to_int(value, f"{context}.{key}")


def req_int(raw: Mapping[str, Any], key: str, context: str) -> int:
    return to_int(require(raw, key, context), f"{context}.{key}")


def to_str(value: Any, context: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise DecodeError(f"{context}: attesa stringa, ricevuto {type(value).__name__}")


def opt_str(raw: Mapping[str, Any], key: str, context: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    return to_str(value, f"{context}.{key}")


def req_str(raw: Mapping[str, Any], key: str, context: str) -> str:
    return to_str(require(raw, key, context), f"{context}.{key}")


def opt_bool(raw: Mapping[str, Any], key: str, context: str) -> Optional[bool]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise DecodeError(f"{context}.{key}: atteso booleano, ricevuto {type(value).__name__}")
    return value


# --- parametri riflessi ---------------------------------------------------

def decode_parameter_echo(value: Any) -> QueryParameter:
    """
    Ricostruisce il parametro inviato a partire dall'oggetto `parameters`
    restituito dal server. Nessun tag esplicito: decide la chiave presente.
    Chiavi sconosciute o assenti -> DecodeError (niente dati scartati in silenzio).
    """
    if not isinstance(value, Mapping):
        raise DecodeError("Struttura JSON non valida per `parameters`")
    unknown = [k for k in value if k not in _ECHO_PRIORITY]
    if unknown:
        raise DecodeError(f"Parametro non riconosciuto in `parameters`: {unknown[0]!r}")
    for key in _ECHO_PRIORITY:
        if key not in value:
            continue
        raw = value[key]
        context = f"parameters.{key}"
        if key == "live":
            return ByLive(to_str(raw, context))
        if key == "next":
            return ByNext(to_int(raw, context))
        if key == "name":
            return ByTeamName(to_str(raw, context))
        return ByTeamId(to_int(raw, context))
    raise DecodeError("Nessun parametro riconosciuto in `parameters`")


def encode_parameter_echo(param: QueryParameter) -> Dict[str, str]:
    return {param.key: param.value}


# --- campo errors ---------------------------------------------------------

@dataclass(frozen=True)
class NoErrors:
    """`errors` come lista JSON: successo, qualunque sia il contenuto."""

    items: Tuple[Any, ...] = ()

    @property
    def has_messages(self) -> bool:
        return False


@dataclass(frozen=True)
class ErrorMessages:
    """`errors` come oggetto JSON campo -> messaggio: richiesta fallita."""

    messages: Tuple[Tuple[str, str], ...] = ()

    @property
    def has_messages(self) -> bool:
        return bool(self.messages)

    def get(self, field_name: str) -> Optional[str]:
        for name, message in self.messages:
            if name == field_name:
                return message
        return None

    def as_dict(self) -> Dict[str, str]:
        return dict(self.messages)


ErrorField = Union[NoErrors, ErrorMessages]


def decode_errors(value: Any) -> ErrorField:
    # La forma (lista vs oggetto) è l'unico discriminante
    if isinstance(value, list):
        return NoErrors(tuple(value))
    if isinstance(value, Mapping):
        messages = []
        for name, message in value.items():
            if not isinstance(message, str):
                raise DecodeError(
                    f"errors.{name}: atteso messaggio stringa, ricevuto {type(message).__name__}"
                )
            messages.append((str(name), message))
        return ErrorMessages(tuple(messages))
    raise DecodeError(f"Forma non riconosciuta per `errors`: {type(value).__name__}")


def encode_errors(errors: ErrorField) -> Union[list, Dict[str, str]]:
    if isinstance(errors, ErrorMessages):
        return errors.as_dict()
    return list(errors.items)


# --- envelope -------------------------------------------------------------

@dataclass(frozen=True)
class Paging:
    current: int = 0
    total: int = 0

    @classmethod
    def from_api(cls, raw: Any) -> "Paging":
        data = as_object(raw, "paging")
        return cls(
            current=req_int(data, "current", "paging"),
            total=req_int(data, "total", "paging"),
        )

    def to_dict(self) -> Dict[str, int]:
        return {"current": self.current, "total": self.total}


@dataclass(frozen=True)
class ResultEnvelope(Generic[T]):
    """Risposta completa dell'API: paging, parametri riflessi, errori e record."""

    get: str = ""
    parameters: QueryParameter = ByNext(1)
    errors: ErrorField = field(default_factory=NoErrors)
    results: int = 0
    paging: Paging = field(default_factory=Paging)
    response: Tuple[T, ...] = ()

    @classmethod
    def from_api(
        cls,
        raw: Any,
        decode_record: Callable[[Any], T],
    ) -> "ResultEnvelope[T]":
        data = as_object(raw, "envelope")
        records = require(data, "response", "envelope")
        if not isinstance(records, list):
            raise DecodeError("envelope.response: attesa una lista")
        return cls(
            get=req_str(data, "get", "envelope"),
            parameters=decode_parameter_echo(require(data, "parameters", "envelope")),
            errors=decode_errors(require(data, "errors", "envelope")),
            results=req_int(data, "results", "envelope"),
            paging=Paging.from_api(require(data, "paging", "envelope")),
            response=tuple(decode_record(item) for item in records),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "get": self.get,
            "parameters": encode_parameter_echo(self.parameters),
            "errors": encode_errors(self.errors),
            "results": self.results,
            "paging": self.paging.to_dict(),
            "response": [record.to_dict() for record in self.response],
        }


__all__ = [
    "ErrorField",
    "ErrorMessages",
    "NoErrors",
    "Paging",
    "ResultEnvelope",
    "decode_errors",
    "decode_parameter_echo",
]
