import pytest

import footballscore.cli as cli_module
from footballscore.cli import FootballOpts, main
from core.config import ConfigError, Settings
from providers.api_football.exceptions import InvalidInputError, TransportError
from providers.api_football.parameters import ClubInfo


class FakeApi:
    """Sostituto di FootballApi: registra i parametri e restituisce dati predefiniti."""

    def __init__(self, fixtures=None, teams=None, error=None):
        self.fixtures = fixtures
        self.teams = teams
        self.error = error
        self.calls = []

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return None

    def get_fixture_data(self, club):
        self.calls.append(("fixtures", club))
        if self.error:
            raise self.error
        return self.fixtures

    def get_team_data(self, club):
        self.calls.append(("teams", club))
        if self.error:
            raise self.error
        return self.teams


@pytest.fixture
def settings():
    return Settings(api_key="DUMMY", club_id=529)


def _install(monkeypatch, settings, api):
    monkeypatch.setattr(cli_module, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_module.FootballApi, "from_settings", classmethod(lambda cls, s, api_key=None: api))


def test_parse_flags() -> None:
    opts = FootballOpts.parse(["-k", "abc", "-c", "42", "--next-match", "2"])
    assert opts == FootballOpts(api_key="abc", next_match=2, club_id=42)


def test_apply_defaults(settings) -> None:
    opts = FootballOpts()
    opts.apply_defaults(settings)
    assert opts.api_key == "DUMMY"
    assert opts.club_id == 529
    opts = FootballOpts(api_key="cli-key", club_id=42)
    opts.apply_defaults(settings)
    assert opts.api_key == "cli-key"
    assert opts.club_id == 42


def test_get_api_requires_key() -> None:
    with pytest.raises(InvalidInputError) as exc:
        FootballOpts().get_api(Settings())
    assert "invalid api key" in str(exc.value)


def test_get_club() -> None:
    assert FootballOpts(club_id=42).get_club(529) == ClubInfo.for_club(42)
    assert FootballOpts(next_match=1).get_club(529) == ClubInfo.from_parameter(529, 1, "")
    assert FootballOpts(club_name="arsenal").get_club(529) == ClubInfo.from_parameter(0, 0, "", "arsenal")
    with pytest.raises(InvalidInputError):
        FootballOpts(next_match=0).get_club(529)
    with pytest.raises(InvalidInputError):
        FootballOpts(club_id=-1).get_club(529)


def test_main_renders_fixtures(monkeypatch, capsys, settings, load_resource) -> None:
    from providers.api_football.fixtures_data import decode_fixtures

    api = FakeApi(fixtures=decode_fixtures(load_resource("fixtures.json")))
    _install(monkeypatch, settings, api)
    assert main(["-c", "529"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Match: Barcelona 0 vs 1 Arsenal")
    assert api.calls == [("fixtures", ClubInfo.for_club(529))]


def test_main_renders_teams(monkeypatch, capsys, settings, load_resource) -> None:
    from providers.api_football.teams_data import decode_teams

    api = FakeApi(teams=decode_teams(load_resource("teams.json")))
    _install(monkeypatch, settings, api)
    assert main(["--club-name", "barcelona", "--next-match", "3"]) == 0
    assert "Name: Barcelona" in capsys.readouterr().out
    assert api.calls[0][0] == "teams"
    assert api.calls[0][1].get_param_options() == [("name", "barcelona")]


def test_main_no_live_event_adds_newline(monkeypatch, capsys, settings) -> None:
    from providers.api_football.envelope import ResultEnvelope

    _install(monkeypatch, settings, FakeApi(fixtures=ResultEnvelope()))
    assert main([]) == 0
    assert capsys.readouterr().out == "Match: no live event\n"


def test_main_missing_key_prints_help(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli_module, "get_settings", lambda: Settings(api_key=None))
    assert main([]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "invalid api key" in captured.err
    assert "usage: footballscore" in captured.err


def test_main_network_error(monkeypatch, capsys, settings) -> None:
    err = TransportError("boom", url="https://v3.football.api-sports.io/fixtures")
    _install(monkeypatch, settings, FakeApi(error=err))
    assert main([]) == 0
    assert "Network Request Error" in capsys.readouterr().err


def test_main_invalid_request(monkeypatch, capsys, settings) -> None:
    _install(monkeypatch, settings, FakeApi(error=TransportError("bad url")))
    assert main([]) == 0
    assert "Invalid API Request" in capsys.readouterr().err


def test_main_decode_error_is_fatal(monkeypatch, capsys, settings) -> None:
    from providers.api_football.exceptions import DecodeError

    _install(monkeypatch, settings, FakeApi(error=DecodeError("Campo obbligatorio mancante: envelope.get")))
    assert main([]) == 1
    assert "Invalid API Response" in capsys.readouterr().err


def test_main_config_error(monkeypatch, capsys) -> None:
    def _boom():
        raise ConfigError("Variabile CLUB_ID deve essere un intero (valore: 'x')")

    monkeypatch.setattr(cli_module, "get_settings", _boom)
    assert main([]) == 1
    assert "CLUB_ID" in capsys.readouterr().err


class FakeResponse:
    def __init__(self, status_code=200, json_data=None):
        self.status_code = status_code
        self._json_data = json_data
        self.text = ""

    def json(self):
        return self._json_data


def _record_gets(monkeypatch, response):
    calls = []

    def _get(self, url, headers=None, timeout=None, **kwargs):
        calls.append({"url": url, "headers": dict(headers or {})})
        return response

    monkeypatch.setattr("providers.api_football.client.requests.Session.get", _get)
    return calls


def test_main_invalid_header_key_prints_help(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli_module, "get_settings", lambda: Settings(api_key=None, club_id=529))
    calls = _record_gets(monkeypatch, FakeResponse(json_data={}))
    assert main(["-k", "bad\nkey"]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "invalid api key header value" in captured.err
    assert "usage: footballscore" in captured.err
    assert calls == []


def test_main_config_path_reaches_request(tmp_path, monkeypatch, capsys, load_resource) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("API_KEY", "API_ENDPOINT", "API_PATH", "CLUB_ID"):
        monkeypatch.delenv(name, raising=False)
    cfg = tmp_path / "custom.env"
    cfg.write_text("API_KEY=FILE_KEY\nCLUB_ID=33\n", encoding="utf-8")
    calls = _record_gets(monkeypatch, FakeResponse(json_data=load_resource("fixtures.json")))

    assert main(["--config", str(cfg)]) == 0
    assert capsys.readouterr().out.startswith("Match: Barcelona 0 vs 1 Arsenal")
    assert len(calls) == 1
    assert calls[0]["url"] == "https://v3.football.api-sports.io/fixtures?team=33&live=all"
    assert calls[0]["headers"] == {"x-rapidapi-key": "FILE_KEY"}
