#!/usr/bin/env python3
"""
Utility per recuperare e formattare i dati delle partite da api-football.com

Specificare il club_id per vedere le informazioni sulla partita del proprio club
preferito (l'ID si trova su api-football.com). Con --club-name vengono mostrate
invece le informazioni sul club.
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

from core.config import ConfigError, Settings, get_settings
from core.formatting import render_fixtures, render_teams
from core.logging import get_logger, set_level
from providers.api_football.client import FootballApi
from providers.api_football.exceptions import DecodeError, InvalidInputError, TransportError
from providers.api_football.parameters import ClubInfo

log = get_logger("footballscore.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="footballscore",
        description="Utility to retrieve and format football data from api-football.com",
        epilog="Please specify the club_id (default from CLUB_ID, 529 = Barcelona).",
    )
    parser.add_argument(
        "-k",
        "--api-key",
        help="Api key (optional but either this or API_KEY environment variable must exist)",
    )
    parser.add_argument("--next-match", type=int, help="Show the next N matches (optional)")
    parser.add_argument("-c", "--club-id", type=int, help="Club id (optional)")
    parser.add_argument("-n", "--club-name", help="Club name, shows club information (optional)")
    parser.add_argument("--config", help="Path of a config.env file (optional)")
    return parser


@dataclass
class FootballOpts:
    api_key: Optional[str] = None
    next_match: Optional[int] = None
    club_id: Optional[int] = None
    club_name: Optional[str] = None
    config: Optional[str] = None

    @classmethod
    def parse(cls, argv: Optional[Sequence[str]] = None) -> "FootballOpts":
        ns = build_parser().parse_args(argv)
        return cls(
            api_key=ns.api_key,
            next_match=ns.next_match,
            club_id=ns.club_id,
            club_name=ns.club_name,
            config=ns.config,
        )

    def apply_defaults(self, settings: Settings) -> None:
        if not self.api_key:
            self.api_key = settings.api_key
        if self.club_id is None:
            self.club_id = settings.club_id

    def get_api(self, settings: Settings) -> FootballApi:
        if not self.api_key:
            raise InvalidInputError("invalid api key")
        return FootballApi.from_settings(settings, api_key=self.api_key)

    def get_club(self, default_club_id: int) -> ClubInfo:
        if self.next_match is not None and self.next_match <= 0:
            raise InvalidInputError("ERROR: --next-match must be a positive number")
        club_id = self.club_id if self.club_id is not None else default_club_id
        if club_id <= 0 and not self.club_name:
            raise InvalidInputError("ERROR: You must specify the correct value for --club-id")
        return ClubInfo.for_club(club_id, next_match=self.next_match, name=self.club_name)

    def run_opts(self, settings: Settings, api: Optional[FootballApi] = None) -> List[str]:
        club = self.get_club(settings.club_id)
        api = api or self.get_api(settings)
        with api:
            if self.club_name:
                return [render_teams(api.get_team_data(club))]
            return [render_fixtures(api.get_fixture_data(club))]

    @staticmethod
    def api_help_msg() -> str:
        return build_parser().format_help()


def main(argv: Optional[Sequence[str]] = None) -> int:
    opts = FootballOpts.parse(argv)
    try:
        if opts.config:
            settings = Settings.from_env(config_path=opts.config)
        else:
            settings = get_settings()
    except ConfigError as e:
        sys.stderr.write(f"Configuration Error: {e}\n")
        return 1
    set_level(settings.log_level)
    opts.apply_defaults(settings)

    try:
        outputs = opts.run_opts(settings)
    except InvalidInputError as e:
        sys.stderr.write(f"{e}\n{FootballOpts.api_help_msg()}")
        return 0
    except TransportError as e:
        if e.url is not None:
            sys.stderr.write("Network Request Error\n")
        else:
            sys.stderr.write("Invalid API Request\n")
        return 0
    except DecodeError as e:
        sys.stderr.write(f"Invalid API Response: {e}\n")
        return 1
    except KeyboardInterrupt:
        return 130

    for output in outputs:
        sys.stdout.write(output)
    if outputs and not outputs[-1].endswith("\n"):
        sys.stdout.write("\n")
    sys.stdout.flush()
    log.debug("footballscore done club=%s name=%s", opts.club_id, opts.club_name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
