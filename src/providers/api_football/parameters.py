from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

DEFAULT_TEAM_ID = 529
DEFAULT_NEXT = 1
DEFAULT_LIVE = "all"

QueryPair = Tuple[str, str]


@dataclass(frozen=True)
class ByLive:
    status: str

    key = "live"

    @property
    def value(self) -> str:
        return self.status

    def as_pair(self) -> QueryPair:
        return (self.key, self.value)


@dataclass(frozen=True)
class ByNext:
    count: int

    key = "next"

    @property
    def value(self) -> str:
        return str(self.count)

    def as_pair(self) -> QueryPair:
        return (self.key, self.value)


@dataclass(frozen=True)
class ByTeamId:
    id: int

    key = "team"

    @property
    def value(self) -> str:
        return str(self.id)

    def as_pair(self) -> QueryPair:
        return (self.key, self.value)


@dataclass(frozen=True)
class ByTeamName:
    name: str

    key = "name"

    @property
    def value(self) -> str:
        return self.name

    def as_pair(self) -> QueryPair:
        return (self.key, self.value)


QueryParameter = Union[ByLive, ByNext, ByTeamId, ByTeamName]


@dataclass(frozen=True)
class ClubInfo:
    """
    Parametri di una singola richiesta all'endpoint.

    `live` e `next` sono gli unici filtri offerti dall'API e non possono essere
    usati insieme: se `live` è valorizzato `next` viene omesso, e viceversa.
    `name` vale solo per l'endpoint teams e, se presente, esclude tutto il resto.
    """

    team: int = DEFAULT_TEAM_ID
    next: int = DEFAULT_NEXT
    live: str = DEFAULT_LIVE
    name: str = ""

    @classmethod
    def from_parameter(cls, team: int, next: int, live: str, name: str = "") -> "ClubInfo":
        return cls(team=team, next=next, live=live, name=name)

    @classmethod
    def for_club(
        cls,
        club_id: int,
        next_match: Optional[int] = None,
        name: Optional[str] = None,
    ) -> "ClubInfo":
        # Precedenza: name > next > live
        if name:
            return cls(team=0, next=0, live="", name=name)
        if next_match:
            return cls(team=club_id, next=next_match, live="", name="")
        return cls(team=club_id, next=0, live=DEFAULT_LIVE, name="")

    def query_parameter(self) -> QueryParameter:
        if self.name:
            return ByTeamName(self.name)
        if not self.live:
            return ByNext(self.next)
        return ByLive(self.live)

    def get_param_options(self) -> List[QueryPair]:
        param = self.query_parameter()
        if isinstance(param, ByTeamName):
            return [param.as_pair()]
        return [ByTeamId(self.team).as_pair(), param.as_pair()]

    def __str__(self) -> str:
        return f"{self.team},{self.next},{self.live},{self.name}"


__all__ = [
    "ByLive",
    "ByNext",
    "ByTeamId",
    "ByTeamName",
    "ClubInfo",
    "QueryPair",
    "QueryParameter",
]
