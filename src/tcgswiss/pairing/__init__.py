"""Swiss pairing for TCG Swiss.

The fold pairing engine and the bye allocator it delegates to.
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

from tcgswiss.pairing.bye_allocator import ByeAllocator
from tcgswiss.pairing.swiss_fold import SwissPairingEngine, create_swiss_pairings

__all__ = [
    "ByeAllocator",
    "SwissPairingEngine",
    "create_swiss_pairings",
]
