"""Data models for TCG Swiss tournaments."""

# TCG Swiss
# Copyright (C) 2025  TCG Swiss developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from tcgswiss.models.bracket import BracketMatch, TopCutBracket
from tcgswiss.models.match_result import MatchResult, Outcome, create_bye_result
from tcgswiss.models.pairing_history import PairingHistory, PairingRecord
from tcgswiss.models.pairing_result import PairingResult
from tcgswiss.models.participant import (
    Participant,
    create_participant,
    create_roster,
)
from tcgswiss.models.round_data import Pairing, RematchForced, RoundData
from tcgswiss.models.standings import StandingsEntry
from tcgswiss.models.tournament_config import TournamentConfig

__all__ = [
    "BracketMatch",
    "MatchResult",
    "Outcome",
    "Pairing",
    "PairingHistory",
    "PairingRecord",
    "PairingResult",
    "Participant",
    "RematchForced",
    "RoundData",
    "StandingsEntry",
    "TopCutBracket",
    "TournamentConfig",
    "create_bye_result",
    "create_participant",
    "create_roster",
]
