"""Exceptions for use in TCG Swiss"""

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


# ========== Base Application Exception ==========


class TcgSwissException(Exception):
    """Base exception for all TCG Swiss errors.

    All custom exceptions in the engine inherit from this class, so a caller
    can catch every engine-specific error with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(TcgSwissException):
    """Base exception for pairing-related errors."""

    pass


class PairingImpossibleException(PairingException):
    """Raised when the pairing search finds no rematch-free pairing.

    The pairing engine catches this itself and falls back to a forced rematch,
    so it never reaches callers of ``generate_pairings``.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(TcgSwissException):
    """Base exception for tournament-related errors."""

    pass


class InsufficientParticipantsException(TournamentException):
    """Raised when fewer than two participants are available."""

    pass


class RoundNotCompleteException(TournamentException):
    """Raised when a round is requested before the previous one is finished."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(TcgSwissException):
    """Base exception for participant-related errors."""

    pass


class UnknownParticipantException(ParticipantException):
    """Raised when a participant id is not on the roster."""

    pass


class DuplicateParticipantException(ParticipantException):
    """Raised when two roster entries share an id."""

    pass


# ========== Result Exceptions ==========


class ResultException(TcgSwissException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., game score contradicts outcome)."""

    pass


class DuplicateResultException(ResultException):
    """Raised when attempting to record a result that already exists."""

    pass


# ========== Top Cut Exceptions ==========


class TopCutException(TcgSwissException):
    """Base exception for top cut selection errors."""

    pass


class InvalidCutSizeException(TopCutException):
    """Raised when the cut size is not a power of two."""

    pass


class InsufficientFieldForCutException(TopCutException):
    """Raised when fewer participants remain than the cut requires."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(TcgSwissException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
