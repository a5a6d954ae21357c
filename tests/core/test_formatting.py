from core.formatting import render_fixtures, render_teams
from providers.api_football.envelope import ErrorMessages, ResultEnvelope, decode_errors
from providers.api_football.fixtures_data import FixtureResponse, decode_fixtures
from providers.api_football.teams_data import TeamResponse, decode_teams

MISSING_KEY = (
    "Error/Missing application key. Go to https://www.api-football.com/documentation-v3 "
    "to learn how to get your API application key."
)


def _fixture(goals=None, venue=None):
    raw = {
        "fixture": {"id": 7, "date": "2025-10-04T19:00:00+00:00", "venue": venue or {}},
        "league": {"id": 140, "name": "La Liga", "season": 2025, "round": "Regular Season - 8"},
        "teams": {"home": {"id": 529, "name": "Barcelona"}, "away": {"id": 538, "name": "Celta Vigo"}},
    }
    if goals is not None:
        raw["goals"] = goals
    return FixtureResponse.from_api(raw)


def test_render_fixture_resource(load_resource) -> None:
    out = render_fixtures(decode_fixtures(load_resource("fixtures.json")))
    assert out.startswith("Match: Barcelona 0 vs 1 Arsenal")
    assert out == (
        "Match: Barcelona 0 vs 1 Arsenal\n"
        "Next match on 2023-07-27T02:00:00+00:00\n"
        "\tLeague: Friendlies Clubs - 2023/Club Friendlies 3\n"
        "\tVenue: SoFi Stadium, Inglewood, California\n"
        "\tHome team: Barcelona\n"
        "\tAway team: Arsenal\n"
    )


def test_render_fixture_not_played_omits_goals() -> None:
    env = ResultEnvelope(response=(_fixture(goals={"home": None, "away": None}),))
    out = render_fixtures(env)
    assert out.startswith("Match: Barcelona vs Celta Vigo\n")
    assert "\tVenue: \n" in out


def test_render_fixture_partial_goals() -> None:
    env = ResultEnvelope(response=(_fixture(goals={"home": 2, "away": None}, venue={"name": "Camp Nou"}),))
    out = render_fixtures(env)
    assert out.startswith("Match: Barcelona 2 vs Celta Vigo\n")
    assert "\tVenue: Camp Nou\n" in out


def test_render_no_live_event() -> None:
    assert render_fixtures(ResultEnvelope()) == "Match: no live event"


def test_render_fixture_error_token(load_resource) -> None:
    out = render_fixtures(decode_fixtures(load_resource("missing_key.json")))
    assert out == f"Error: token - {MISSING_KEY}\n"


def test_render_fixture_errors_fixed_order() -> None:
    errors = ErrorMessages((("requests", "limit reached"), ("plan", "free"), ("access", "suspended")))
    out = render_fixtures(ResultEnvelope(errors=errors))
    assert out.splitlines() == [
        "Error: access - suspended",
        "Error: requests - limit reached",
    ]
    assert "plan" not in out


def test_render_fixture_errors_skip_team_only_fields() -> None:
    errors = decode_errors({"name": "bad name", "plan": "free plan"})
    assert render_fixtures(ResultEnvelope(errors=errors)) == "Match: no live event"


def test_render_fixture_empty_error_map_is_no_live_event() -> None:
    assert render_fixtures(ResultEnvelope(errors=ErrorMessages())) == "Match: no live event"


def test_render_teams_resource(load_resource) -> None:
    out = render_teams(decode_teams(load_resource("teams.json")))
    assert out.startswith("Here's your club information:")
    assert "\nName: Barcelona\n" in out
    assert "Club ID: 529\n" in out
    assert "Venue: Estadi Olímpic Lluís Companys\n" in out
    assert out.endswith("\n\n")


def test_render_teams_without_venue_name() -> None:
    item = TeamResponse.from_api({"team": {"name": "Barcelona"}, "venue": {"city": "Barcelona"}})
    out = render_teams(ResultEnvelope(response=(item,)))
    assert out.startswith("Here's your club information:")
    assert "Name: Barcelona" in out
    assert "Club ID: 0" in out
    assert "Venue:" not in out


def test_render_teams_errors_include_name() -> None:
    errors = ErrorMessages((("name", "The Name field must contain at least 3 characters."), ("token", "bad"), ("plan", "free")))
    out = render_teams(ResultEnvelope(errors=errors))
    assert out == (
        "Error: token - bad\n"
        "Error: name - The Name field must contain at least 3 characters.\n"
    )
    assert "plan" not in out


def test_render_teams_unavailable() -> None:
    assert render_teams(ResultEnvelope()) == "Your club data is unavailable"
