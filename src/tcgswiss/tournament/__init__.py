"""Tournament management components for TCG Swiss.

Each component has one responsibility; :class:`tcgswiss.models.tournament.Tournament`
wires them together for a single event.
"""

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

from tcgswiss.tournament.result_recorder import ResultRecorder
from tcgswiss.tournament.round_manager import RoundManager
from tcgswiss.tournament.round_planner import RoundPlan, plan_event, plan_rounds
from tcgswiss.tournament.standings_calculator import StandingsCalculator
from tcgswiss.tournament.top_cut import TopCutSelector

__all__ = [
    "ResultRecorder",
    "RoundManager",
    "RoundPlan",
    "StandingsCalculator",
    "TopCutSelector",
    "plan_event",
    "plan_rounds",
]
