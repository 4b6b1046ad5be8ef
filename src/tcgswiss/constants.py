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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Match points
POINTS_WIN = 3
POINTS_DRAW = 1
POINTS_LOSS = 0
POINTS_BYE = POINTS_WIN  # A bye is worth a full match win

# A bye is recorded as a clean 2-0
BYE_GAME_SCORE = (2, 0)

# Percentage tiebreakers never drop below one third
MIN_PERCENTAGE = 1.0 / 3.0

# Event tiers
TIER_1 = "TIER_1"
TIER_2 = "TIER_2"
TIER_3 = "TIER_3"
TIER_4 = "TIER_4"
DEFAULT_TIER = TIER_1
TIERS = (TIER_1, TIER_2, TIER_3, TIER_4)

# Premier tiers play extra Swiss rounds on top of the base formula
EXTRA_ROUNDS_BY_TIER = {
    TIER_1: 0,
    TIER_2: 0,
    TIER_3: 3,
    TIER_4: 3,
}

# Swiss rounds never go below this once the field reaches MIN_ROUNDS_FIELD
MIN_ROUNDS = 3
MIN_ROUNDS_FIELD = 4

# Recommended top cut by field size: (min, max, cut)
TOP_CUT_TABLE_TIER_1_2 = [
    (4, 8, 0),
    (9, 16, 4),
    (17, 32, 4),
    (33, 2048, 8),
]
TOP_CUT_TABLE_TIER_3_4 = [
    (4, 8, 0),
    (9, 2048, 8),
]

# Pairing search
DEFAULT_MAX_PAIRING_ATTEMPTS = 20000

# Round clock
DEFAULT_ROUND_TIME_MINUTES = 50

