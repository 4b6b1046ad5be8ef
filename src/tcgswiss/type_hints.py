"""Type hints used in TCG Swiss."""

from typing import Optional, Tuple

# Games won by participant A, games won by participant B
GameScore = Tuple[int, int]
MaybeGameScore = Optional[GameScore]

# Pair of participant ids; the second is None for a bye
PairingIDs = Tuple[str, Optional[str]]

#  LocalWords:  PairingIDs GameScore
