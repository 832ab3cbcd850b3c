import random
from datetime import datetime, timedelta, timezone

import pytest

from matchwheel.models.tournament_config import TournamentConfig
from matchwheel.tournament.reminders import due_reminders
from matchwheel.tournament.session import TournamentSession

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _session(start_at, reminders_sent=(), emails=True):
    session = TournamentSession(
        TournamentConfig(
            name="Evening Cup",
            tournament_start_at=start_at,
            reminders_sent=list(reminders_sent),
        ),
        rng=random.Random(3),
    )
    session.register("Ann", email="ann@example.com" if emails else None)
    session.register("Bob")
    session.register("Cid", email="cid@example.com" if emails else None)
    session.register("Dee")
    return session


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(hours=1), ["1-hour"]),
        (timedelta(minutes=45), ["1-hour"]),
        (timedelta(minutes=75), ["1-hour"]),
        (timedelta(minutes=44), []),
        (timedelta(minutes=76), []),
        (timedelta(hours=24), ["24-hour"]),
        (timedelta(hours=23, minutes=45), ["24-hour"]),
        (timedelta(hours=24, minutes=15), ["24-hour"]),
        (timedelta(hours=24, minutes=16), []),
        (timedelta(hours=12), []),
        (timedelta(hours=-1), []),
    ],
)
def test_reminder_windows(offset, expected):
    session = _session(NOW + offset)
    due = due_reminders(session, now=NOW)
    assert [r.reminder_type for r in due] == expected


def test_reminder_recipients_have_emails():
    session = _session(NOW + timedelta(hours=1))
    (reminder,) = due_reminders(session, now=NOW)

    assert reminder.emails == ["ann@example.com", "cid@example.com"]
    assert reminder.time_left == "1 hour"
    assert reminder.start_at == NOW + timedelta(hours=1)


def test_sent_reminder_is_not_due_again():
    session = _session(NOW + timedelta(hours=24))
    (reminder,) = due_reminders(session, now=NOW)
    assert reminder.time_left == "24 hours"

    session.mark_reminder_sent(reminder.reminder_type)

    assert due_reminders(session, now=NOW) == []
    assert due_reminders(session, now=NOW + timedelta(minutes=10)) == []


def test_already_sent_types_from_snapshot_are_skipped():
    session = _session(NOW + timedelta(hours=1), reminders_sent=["1-hour"])
    restored = TournamentSession.from_dict(session.to_dict())
    assert due_reminders(restored, now=NOW) == []


def test_no_reminders_without_start_time():
    assert due_reminders(_session(None), now=NOW) == []


def test_no_reminders_without_email_recipients():
    session = _session(NOW + timedelta(hours=1), emails=False)
    assert due_reminders(session, now=NOW) == []


def test_no_reminders_once_matchups_exist():
    session = _session(NOW + timedelta(hours=1))
    session.generate_matchups()
    assert session.status == "in_progress"
    assert due_reminders(session, now=NOW) == []


def test_now_accepts_iso_strings():
    session = _session(NOW + timedelta(hours=1))
    due = due_reminders(session, now="2025-06-01T12:00:00Z")
    assert [r.reminder_type for r in due] == ["1-hour"]
