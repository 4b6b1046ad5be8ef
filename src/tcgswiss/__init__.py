"""TCG Swiss: Swiss-system pairing and standings for trading card game events."""

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

from tcgswiss.models.match_result import Outcome
from tcgswiss.models.participant import Participant, create_roster
from tcgswiss.models.tournament import Tournament, TournamentState
from tcgswiss.models.tournament_config import TournamentConfig

__version__ = "0.1.0"

__all__ = [
    "Outcome",
    "Participant",
    "Tournament",
    "TournamentConfig",
    "TournamentState",
    "create_roster",
]
