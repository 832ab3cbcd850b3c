from datetime import datetime, timedelta, timezone

import pytest

from matchwheel.exceptions import (
    DuplicateParticipantException,
    EmailValidationException,
    InvalidConfigurationException,
    InvalidParticipantDataException,
    RegistrationClosedException,
    TournamentFullException,
)
from matchwheel.models.participant import Participant
from matchwheel.models.tournament_config import TournamentConfig, parse_timestamp
from matchwheel.tournament.registration import (
    RegistrationStatus,
    build_participant,
    can_register,
    get_registration_status,
)
from matchwheel.utils.validation import (
    name_key,
    validate_email,
    validate_email_strict,
    validate_participant_name,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_window_without_bounds_is_open():
    assert get_registration_status(None, None, NOW) is RegistrationStatus.OPEN


@pytest.mark.parametrize(
    "open_at,close_at,expected",
    [
        (NOW + timedelta(hours=1), None, RegistrationStatus.NOT_OPENED),
        (NOW - timedelta(hours=1), None, RegistrationStatus.OPEN),
        (None, NOW - timedelta(seconds=1), RegistrationStatus.CLOSED),
        (None, NOW + timedelta(days=2), RegistrationStatus.OPEN),
        (NOW - timedelta(days=1), NOW + timedelta(days=1), RegistrationStatus.OPEN),
    ],
)
def test_window_status(open_at, close_at, expected):
    assert get_registration_status(open_at, close_at, NOW) is expected


def test_window_accepts_iso_strings_and_naive_times():
    # naive strings are read as UTC
    assert (
        get_registration_status("2025-06-01T13:00:00", None, "2025-06-01T12:00:00Z")
        is RegistrationStatus.NOT_OPENED
    )
    assert (
        get_registration_status(None, "2025-06-01T11:00:00+00:00", NOW)
        is RegistrationStatus.CLOSED
    )


def test_can_register_uses_config_window():
    config = TournamentConfig(
        name="Cup",
        registration_open_at="2025-05-01T00:00:00Z",
        registration_close_at="2025-05-31T00:00:00Z",
    )
    assert not can_register(config, NOW)
    assert can_register(config, datetime(2025, 5, 15, tzinfo=timezone.utc))


def _config(**kwargs):
    return TournamentConfig(name="Spring Cup", **kwargs)


def test_build_participant_trims_input():
    participant = build_participant(
        [], _config(), "  Alice  ", email=" alice@example.com ", image="a.png", now=NOW
    )
    assert participant == Participant(
        name="Alice", email="alice@example.com", image="a.png"
    )


@pytest.mark.parametrize("name", ["", "   ", "A", " B "])
def test_short_names_are_rejected(name):
    with pytest.raises(InvalidParticipantDataException):
        build_participant([], _config(), name, now=NOW)


def test_malformed_email_is_rejected():
    with pytest.raises(EmailValidationException):
        build_participant([], _config(), "Alice", email="not-an-email", now=NOW)


def test_duplicate_names_are_case_insensitive():
    roster = [Participant(name="Alice")]
    with pytest.raises(DuplicateParticipantException):
        build_participant(roster, _config(), "  aLiCe ", now=NOW)


def test_duplicate_emails_are_rejected():
    roster = [Participant(name="Alice", email="Alice@Example.com")]
    with pytest.raises(DuplicateParticipantException):
        build_participant(roster, _config(), "Bob", email="alice@example.com", now=NOW)


def test_full_tournament_is_rejected():
    roster = [Participant(name=f"Player {i}") for i in range(4)]
    with pytest.raises(TournamentFullException):
        build_participant(roster, _config(max_participants=4), "Late", now=NOW)


@pytest.mark.parametrize(
    "window",
    [
        {"registration_open_at": NOW + timedelta(days=1)},
        {"registration_close_at": NOW - timedelta(days=1)},
    ],
)
def test_registration_outside_window_is_rejected(window):
    with pytest.raises(RegistrationClosedException):
        build_participant([], _config(**window), "Alice", now=NOW)


def test_name_key_policy():
    assert name_key("  Bob ") == name_key("BOB") == "bob"


@pytest.mark.parametrize(
    "email,valid",
    [
        ("user@example.com", True),
        ("", True),
        (None, True),
        ("user@", False),
        ("user example@x.com", False),
    ],
)
def test_validate_email(email, valid):
    assert bool(validate_email(email)) is valid


def test_email_validation_results():
    assert validate_email("  ").sanitized_value is None
    assert validate_email_strict(" user@example.com ") == "user@example.com"
    assert validate_email_strict(None) is None
    with pytest.raises(EmailValidationException, match="Invalid email format"):
        validate_email_strict("nope")


def test_name_validation_reports_reason():
    result = validate_participant_name(" A ")
    assert not result
    assert "at least 2 characters" in result.error_message
    assert validate_participant_name("  Ada ").sanitized_value == "Ada"


# ========== Configuration ==========


def test_config_round_trip():
    config = TournamentConfig(
        name=" League ",
        max_participants=8,
        pairing_strategy="greedy",
        registration_open_at="2025-05-01T09:30:00+02:00",
        tournament_start_at=datetime(2025, 6, 1, 18, 0),
    )
    data = config.to_dict()

    assert data["name"] == "League"
    assert data["registration_open_at"] == "2025-05-01T09:30:00+02:00"
    assert data["tournament_start_at"] == "2025-06-01T18:00:00+00:00"
    assert data["registration_close_at"] is None
    assert TournamentConfig.from_dict(data) == config


def test_config_defaults_from_sparse_record():
    config = TournamentConfig.from_dict({"name": "Legacy", "max_participants": None})
    assert config.max_participants == 16
    assert config.matches_per_participant == 3
    assert config.pairing_strategy == "circulant"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"name": "x", "pairing_strategy": "swiss"},
        {"name": "x", "max_participants": 3},
        {"name": "x", "matches_per_participant": 0},
        {
            "name": "x",
            "registration_open_at": "2025-06-02T00:00:00Z",
            "registration_close_at": "2025-06-01T00:00:00Z",
        },
        {"name": "x", "tournament_start_at": "next tuesday"},
        {"name": "x", "tournament_start_at": 1748800000},
        {"name": "x", "matches_per_participant": "3"},
        {"name": "x", "max_participants": 8.5},
        {"name": "x", "reminders_sent": ["2-hour"]},
        {"name": "x", "reminders_sent": "1-hour"},
        {"name": 42},
    ],
)
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(**kwargs)


def test_parse_timestamp_handles_empty_values():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None


def test_config_null_numbers_fall_back_to_defaults():
    config = TournamentConfig.from_dict(
        {"name": "Cup", "matches_per_participant": None, "pairing_strategy": None}
    )
    assert config.matches_per_participant == 3
    assert config.pairing_strategy == "circulant"
    assert config.reminders_sent == []


@pytest.mark.parametrize(
    "data",
    [
        {"name": "Cup", "matches_per_participant": "three"},
        {"name": "Cup", "max_participants": "16"},
        {"name": "Cup", "matches_per_participant": True},
        {"name": "Cup", "reminders_sent": {"1-hour": True}},
        ["not", "a", "tournament"],
    ],
)
def test_malformed_stored_config_is_rejected(data):
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig.from_dict(data)
