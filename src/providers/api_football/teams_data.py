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
    require,
)


@dataclass(frozen=True)
class Team:
    id: Optional[int] = None
    name: Optional[str] = None
    code: Optional[str] = None
    country: Optional[str] = None
    founded: Optional[int] = None
    national: Optional[bool] = None
    logo: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Team":
        ctx = "team"
        return cls(
            id=opt_int(raw, "id", ctx),
            name=opt_str(raw, "name", ctx),
            code=opt_str(raw, "code", ctx),
            country=opt_str(raw, "country", ctx),
            founded=opt_int(raw, "founded", ctx),
            national=opt_bool(raw, "national", ctx),
            logo=opt_str(raw, "logo", ctx),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "country": self.country,
            "founded": self.founded,
            "national": self.national,
            "logo": self.logo,
        }


@dataclass(frozen=True)
class TeamVenue:
    id: Optional[int] = None
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    capacity: Optional[int] = None
    surface: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "TeamVenue":
        ctx = "venue"
        return cls(
            id=opt_int(raw, "id", ctx),
            name=opt_str(raw, "name", ctx),
            address=opt_str(raw, "address", ctx),
            city=opt_str(raw, "city", ctx),
            capacity=opt_int(raw, "capacity", ctx),
            surface=opt_str(raw, "surface", ctx),
            image=opt_str(raw, "image", ctx),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "capacity": self.capacity,
            "surface": self.surface,
            "image": self.image,
        }


@dataclass(frozen=True)
class TeamResponse:
    team: Team
    venue: TeamVenue = field(default_factory=TeamVenue)

    @classmethod
    def from_api(cls, raw: Any) -> "TeamResponse":
        data = as_object(raw, "response[]")
        return cls(
            team=Team.from_api(as_object(require(data, "team", "response[]"), "team")),
            venue=TeamVenue.from_api(opt_object(data, "venue", "response[]")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"team": self.team.to_dict(), "venue": self.venue.to_dict()}


TeamsData = ResultEnvelope[TeamResponse]


def decode_teams(raw: Any) -> "ResultEnvelope[TeamResponse]":
    return ResultEnvelope.from_api(raw, TeamResponse.from_api)


__all__ = ["Team", "TeamResponse", "TeamVenue", "TeamsData", "decode_teams"]
