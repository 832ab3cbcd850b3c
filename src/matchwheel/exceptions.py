"""Exceptions for use in Matchwheel"""

# Matchwheel
# Copyright (C) 2025  Matchwheel developers
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


class MatchwheelException(Exception):
    """Base exception for all Matchwheel errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(MatchwheelException):
    """Base exception for matchup generation errors."""

    pass


class InsufficientParticipantsException(PairingException):
    """Raised when there are too few participants to generate matchups."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(MatchwheelException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class DuplicateParticipantException(TournamentException):
    """Raised when attempting to add a participant that already exists."""

    pass


class TournamentFullException(TournamentException):
    """Raised when the tournament has reached its participant limit."""

    pass


class RegistrationClosedException(TournamentException):
    """Raised when registering outside of the registration window."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(MatchwheelException):
    """Base exception for participant-related errors."""

    pass


class ParticipantNotFoundException(ParticipantException):
    """Raised when a requested participant cannot be found."""

    pass


class InvalidParticipantDataException(ParticipantException):
    """Raised when participant data is invalid or incomplete."""

    pass


# ========== Result Exceptions ==========


class ResultException(MatchwheelException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., unknown outcome)."""

    pass


class SelfPairingException(InvalidResultException):
    """Raised when a result names the same participant on both sides."""

    pass


class MissingMatchException(ResultException):
    """Raised when the requested pairing does not exist in the matchups."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(MatchwheelException):
    """Base exception for validation errors."""

    pass


class EmailValidationException(ValidationException):
    """Raised when an email address is invalid."""

    pass


# ========== Wheel Exceptions ==========


class WheelException(MatchwheelException):
    """Base exception for winner wheel errors."""

    pass


class EmptyWheelException(WheelException):
    """Raised when spinning a wheel with no entrants."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(MatchwheelException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(MatchwheelException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
