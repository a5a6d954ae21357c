from __future__ import annotations

from typing import List, Sequence

from providers.api_football.envelope import ErrorField, ErrorMessages, ResultEnvelope
from providers.api_football.fixtures_data import FixtureResponse
from providers.api_football.teams_data import TeamResponse

FIXTURE_ERROR_FIELDS = ("access", "token", "requests")
TEAM_ERROR_FIELDS = ("access", "token", "requests", "name")

NO_LIVE_EVENT = "Match: no live event"
CLUB_DATA_UNAVAILABLE = "Your club data is unavailable"
CLUB_INFO_HEADER = "Here's your club information:"


def _error_lines(errors: ErrorField, known_fields: Sequence[str]) -> List[str]:
    """
    Una riga "Error: campo - messaggio" per ogni campo noto presente,
    nell'ordine fisso. Gli altri campi non vengono mostrati.
    """
    if not isinstance(errors, ErrorMessages):
        return []
    lines: List[str] = []
    for field_name in known_fields:
        message = errors.get(field_name)
        if message is not None:
            lines.append(f"Error: {field_name} - {message}\n")
    return lines


def _match_line(item: FixtureResponse) -> str:
    home = item.teams.home.name
    away = item.teams.away.name
    home_part = home if item.goals.home is None else f"{home} {item.goals.home}"
    away_part = away if item.goals.away is None else f"{item.goals.away} {away}"
    return f"Match: {home_part} vs {away_part}"


def render_fixtures(envelope: "ResultEnvelope[FixtureResponse]") -> str:
    if envelope.response:
        item = envelope.response[0]
        league = item.league
        venue = item.fixture.venue
        season = "" if league.season is None else league.season
        venue_text = ", ".join(part for part in (venue.name, venue.city) if part)
        return (
            f"{_match_line(item)}\n"
            f"Next match on {item.fixture.date}\n"
            f"\tLeague: {league.name} - {season}/{league.round or ''}\n"
            f"\tVenue: {venue_text}\n"
            f"\tHome team: {item.teams.home.name}\n"
            f"\tAway team: {item.teams.away.name}\n"
        )

    lines = _error_lines(envelope.errors, FIXTURE_ERROR_FIELDS)
    if lines:
        return "".join(lines)
    return NO_LIVE_EVENT


def render_teams(envelope: "ResultEnvelope[TeamResponse]") -> str:
    if envelope.response:
        item = envelope.response[0]
        out = [f"{CLUB_INFO_HEADER}\n"]
        if item.team.name is not None:
            out.append(f"Name: {item.team.name}\n")
        out.append(f"Club ID: {item.team.id or 0}\n")
        if item.venue.name is not None:
            out.append(f"Venue: {item.venue.name}\n")
        out.append("\n")
        return "".join(out)

    lines = _error_lines(envelope.errors, TEAM_ERROR_FIELDS)
    if lines:
        return "".join(lines)
    return CLUB_DATA_UNAVAILABLE


__all__ = [
    "CLUB_DATA_UNAVAILABLE",
    "NO_LIVE_EVENT",
    "render_fixtures",
    "render_teams",
]
