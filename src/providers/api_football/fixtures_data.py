from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .envelope import (
    ResultEnvelope,
    as_object,
    opt_bool,
    opt_int,
    opt_object,
    opt_str,
    req_int,
    req_str,
    require,
)


@dataclass(frozen=True)
class Periods:
    first: Optional[int] = None
    second: Optional[int] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Periods":
        return cls(
            first=opt_int(raw, "first", "fixture.periods"),
            second=opt_int(raw, "second", "fixture.periods"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"first": self.first, "second": self.second}


@dataclass(frozen=True)
class Venue:
    id: Optional[int] = None
    name: Optional[str] = None
    city: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Venue":
        return cls(
            id=opt_int(raw, "id", "fixture.venue"),
            name=opt_str(raw, "name", "fixture.venue"),
            city=opt_str(raw, "city", "fixture.venue"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "city": self.city}


@dataclass(frozen=True)
class Status:
    long: str = "Not Started"
    short: str = "NS"
    elapsed: Optional[int] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Status":
        if not raw:
            return cls()
        long = opt_str(raw, "long", "fixture.status")
        short = opt_str(raw, "short", "fixture.status")
        return cls(
            long=cls.long if long is None else long,
            short=cls.short if short is None else short,
            elapsed=opt_int(raw, "elapsed", "fixture.status"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"long": self.long, "short": self.short, "elapsed": self.elapsed}


@dataclass(frozen=True)
class Fixture:
    id: int
    date: str
    referee: Optional[str] = None
    timezone: str = "UTC"
    timestamp: Optional[int] = None
    periods: Periods = field(default_factory=Periods)
    venue: Venue = field(default_factory=Venue)
    status: Status = field(default_factory=Status)

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Fixture":
        ctx = "fixture"
        tz = opt_str(raw, "timezone", ctx)
        return cls(
            id=req_int(raw, "id", ctx),
            date=req_str(raw, "date", ctx),
            referee=opt_str(raw, "referee", ctx),
            timezone="UTC" if tz is None else tz,
            timestamp=opt_int(raw, "timestamp", ctx),
            periods=Periods.from_api(opt_object(raw, "periods", ctx)),
            venue=Venue.from_api(opt_object(raw, "venue", ctx)),
            status=Status.from_api(opt_object(raw, "status", ctx)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "referee": self.referee,
            "timezone": self.timezone,
            "date": self.date,
            "timestamp": self.timestamp,
            "periods": self.periods.to_dict(),
            "venue": self.venue.to_dict(),
            "status": self.status.to_dict(),
        }


@dataclass(frozen=True)
class League:
    id: int
    name: str
    country: Optional[str] = None
    logo: Optional[str] = None
    flag: Optional[str] = None
    season: Optional[int] = None
    round: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "League":
        ctx = "league"
        return cls(
            id=req_int(raw, "id", ctx),
            name=req_str(raw, "name", ctx),
            country=opt_str(raw, "country", ctx),
            logo=opt_str(raw, "logo", ctx),
            flag=opt_str(raw, "flag", ctx),
            season=opt_int(raw, "season", ctx),
            round=opt_str(raw, "round", ctx),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "logo": self.logo,
            "flag": self.flag,
            "season": self.season,
            "round": self.round,
        }


@dataclass(frozen=True)
class TeamSummary:
    id: int
    name: str
    logo: Optional[str] = None
    winner: Optional[bool] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any], ctx: str) -> "TeamSummary":
        return cls(
            id=req_int(raw, "id", ctx),
            name=req_str(raw, "name", ctx),
            logo=opt_str(raw, "logo", ctx),
            winner=opt_bool(raw, "winner", ctx),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "logo": self.logo, "winner": self.winner}


@dataclass(frozen=True)
class Teams:
    home: TeamSummary
    away: TeamSummary

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Teams":
        return cls(
            home=TeamSummary.from_api(as_object(require(raw, "home", "teams"), "teams.home"), "teams.home"),
            away=TeamSummary.from_api(as_object(require(raw, "away", "teams"), "teams.away"), "teams.away"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"home": self.home.to_dict(), "away": self.away.to_dict()}


@dataclass(frozen=True)
class Goals:
    """Reti home/away: None significa partita non ancora giocata."""

    home: Optional[int] = None
    away: Optional[int] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any], ctx: str = "goals") -> "Goals":
        return cls(home=opt_int(raw, "home", ctx), away=opt_int(raw, "away", ctx))

    def to_dict(self) -> Dict[str, Any]:
        return {"home": self.home, "away": self.away}

    def __str__(self) -> str:
        if self.home is not None and self.away is not None:
            return f"{self.home} {self.away}"
        if self.home is not None:
            return f"{self.home} "
        if self.away is not None:
            return f" {self.away}"
        return ""


@dataclass(frozen=True)
class Score:
    halftime: Goals = field(default_factory=Goals)
    fulltime: Goals = field(default_factory=Goals)
    extratime: Goals = field(default_factory=Goals)
    penalty: Goals = field(default_factory=Goals)

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Score":
        return cls(
            halftime=Goals.from_api(opt_object(raw, "halftime", "score"), "score.halftime"),
            fulltime=Goals.from_api(opt_object(raw, "fulltime", "score"), "score.fulltime"),
            extratime=Goals.from_api(opt_object(raw, "extratime", "score"), "score.extratime"),
            penalty=Goals.from_api(opt_object(raw, "penalty", "score"), "score.penalty"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "halftime": self.halftime.to_dict(),
            "fulltime": self.fulltime.to_dict(),
            "extratime": self.extratime.to_dict(),
            "penalty": self.penalty.to_dict(),
        }


@dataclass(frozen=True)
class FixtureResponse:
    fixture: Fixture
    league: League
    teams: Teams
    goals: Goals = field(default_factory=Goals)
    score: Score = field(default_factory=Score)

    @classmethod
    def from_api(cls, raw: Any) -> "FixtureResponse":
        data = as_object(raw, "response[]")
        return cls(
            fixture=Fixture.from_api(as_object(require(data, "fixture", "response[]"), "fixture")),
            league=League.from_api(as_object(require(data, "league", "response[]"), "league")),
            teams=Teams.from_api(as_object(require(data, "teams", "response[]"), "teams")),
            goals=Goals.from_api(opt_object(data, "goals", "response[]")),
            score=Score.from_api(opt_object(data, "score", "response[]")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fixture": self.fixture.to_dict(),
            "league": self.league.to_dict(),
            "teams": self.teams.to_dict(),
            "goals": self.goals.to_dict(),
            "score": self.score.to_dict(),
        }


FixturesData = ResultEnvelope[FixtureResponse]


def decode_fixtures(raw: Any) -> "ResultEnvelope[FixtureResponse]":
    return ResultEnvelope.from_api(raw, FixtureResponse.from_api)


__all__ = [
    "Fixture",
    "FixtureResponse",
    "FixturesData",
    "Goals",
    "League",
    "Periods",
    "Score",
    "Status",
    "TeamSummary",
    "Teams",
    "Venue",
    "decode_fixtures",
]
