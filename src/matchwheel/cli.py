"""Command-line interface for running a tournament stored in a JSON file.

Each command loads the tournament file, applies one operation and writes
the file back.
"""

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

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from matchwheel import __version__
from matchwheel.constants import (
    DEFAULT_MAX_PARTICIPANTS,
    PAIRING_STRATEGIES,
    VALID_RESULTS,
)
from matchwheel.exceptions import MatchwheelException
from matchwheel.models.tournament_config import TournamentConfig
from matchwheel.storage.json_store import read_snapshot, write_snapshot
from matchwheel.tournament.reminders import due_reminders
from matchwheel.tournament.session import TournamentSession
from matchwheel.tournament.summary import build_summary, format_standings
from matchwheel.utils import set_log_level, setup_logger

logger = setup_logger(__name__)


def _load(path: Path, seed: Optional[int] = None) -> TournamentSession:
    rng = random.Random(seed) if seed is not None else None
    return TournamentSession.from_dict(read_snapshot(path), rng=rng)


def _save(path: Path, session: TournamentSession) -> None:
    write_snapshot(path, session.to_dict())


# ========== Commands ==========


def cmd_create(args: argparse.Namespace) -> int:
    if args.file.exists() and not args.force:
        print(f"{args.file} already exists (use --force to overwrite)")
        return 1
    config = TournamentConfig(
        name=args.name,
        max_participants=args.max,
        pairing_strategy=args.strategy,
        registration_open_at=args.opens,
        registration_close_at=args.closes,
        tournament_start_at=args.starts,
    )
    session = TournamentSession(config)
    _save(args.file, session)
    print(f"Created tournament '{session.name}' ({session.tournament_id})")
    return 0


def cmd_join(args: argparse.Namespace) -> int:
    session = _load(args.file, args.seed)
    participant = session.register(args.name, email=args.email, image=args.image)
    _save(args.file, session)
    print(f"Welcome to {session.name}, {participant.name}!")
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    session = _load(args.file)
    participant = session.remove_participant(args.name)
    _save(args.file, session)
    print(f"{participant.name} removed from tournament")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    session = _load(args.file, args.seed)
    if args.strategy:
        session.set_pairing_strategy(args.strategy)
    result = session.generate_matchups()
    _save(args.file, session)
    for matchup in result.assignment:
        opponents = ", ".join(matchup.opponent_names) or "(no opponents)"
        print(f"{matchup.participant.name}: {opponents}")
    if result.under_quota:
        names = ", ".join(p.name for p in result.under_quota)
        print(f"Warning: fewer than {session.config.matches_per_participant} matches for {names}")
    return 0


def cmd_result(args: argparse.Namespace) -> int:
    session = _load(args.file)
    session.record_result(args.participant, args.opponent, args.score, args.outcome)
    _save(args.file, session)
    print(f"{args.participant} vs {args.opponent}: {args.score} ({args.outcome})")
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    session = _load(args.file)
    session.clear_results()
    _save(args.file, session)
    print("All results cleared")
    return 0


def cmd_standings(args: argparse.Namespace) -> int:
    session = _load(args.file)
    print(format_standings(session) or "No matchups yet")
    for group in session.tie_groups():
        names = ", ".join(p.name for p in group.participants)
        print(f"Tie at {group.wins}W {group.losses}L: {names}")
    return 0


def cmd_spin(args: argparse.Namespace) -> int:
    session = _load(args.file, args.seed)
    if args.tiebreaker:
        groups = session.tie_groups()
        if not groups:
            print("No ties to break")
            return 0
        for group in groups:
            spin = session.spin_tiebreaker(group)
            print(f"Tiebreaker {group.wins}W {group.losses}L: {spin.winner.name}")
        _save(args.file, session)
        return 0
    spin = session.spin_wheel()
    _save(args.file, session)
    print(f"Winner: {spin.winner.name}")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    print(build_summary(_load(args.file)))
    return 0


def cmd_reminders(args: argparse.Namespace) -> int:
    session = _load(args.file)
    reminders = due_reminders(session, now=args.now)
    if not reminders:
        print("No reminders due")
        return 0
    for reminder in reminders:
        print(
            f"{reminder.reminder_type} reminder for {session.name} "
            f"(starts in {reminder.time_left}): {', '.join(reminder.emails)}"
        )
        if args.mark:
            session.mark_reminder_sent(reminder.reminder_type)
    if args.mark:
        _save(args.file, session)
    return 0


# ========== Parser ==========


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="matchwheel",
        description="Run a three-opponent matchup tournament stored in a JSON file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("create", help="Create a new tournament file")
    p.add_argument("file", type=Path)
    p.add_argument("name")
    p.add_argument(
        "--max",
        type=int,
        default=DEFAULT_MAX_PARTICIPANTS,
        help=f"Maximum participants (default: {DEFAULT_MAX_PARTICIPANTS})",
    )
    p.add_argument("--strategy", choices=PAIRING_STRATEGIES, default=PAIRING_STRATEGIES[0])
    p.add_argument("--opens", help="Registration opens at (ISO-8601)")
    p.add_argument("--closes", help="Registration closes at (ISO-8601)")
    p.add_argument("--starts", help="Tournament starts at (ISO-8601)")
    p.add_argument("--force", action="store_true", help="Overwrite an existing file")
    p.set_defaults(func=cmd_create)

    p = sub.add_parser("join", help="Register a participant")
    p.add_argument("file", type=Path)
    p.add_argument("name")
    p.add_argument("--email")
    p.add_argument("--image")
    p.add_argument("--seed", type=int, help="Random seed for reproducibility")
    p.set_defaults(func=cmd_join)

    p = sub.add_parser("remove", help="Remove a participant before matchups exist")
    p.add_argument("file", type=Path)
    p.add_argument("name")
    p.set_defaults(func=cmd_remove)

    p = sub.add_parser("generate", help="Generate matchups")
    p.add_argument("file", type=Path)
    p.add_argument("--seed", type=int, help="Random seed for reproducibility")
    p.add_argument("--strategy", choices=PAIRING_STRATEGIES)
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("result", help="Record a match result")
    p.add_argument("file", type=Path)
    p.add_argument("participant")
    p.add_argument("opponent")
    p.add_argument("score")
    p.add_argument("outcome", choices=VALID_RESULTS, help="Outcome for the first participant")
    p.set_defaults(func=cmd_result)

    p = sub.add_parser("clear", help="Reset all results")
    p.add_argument("file", type=Path)
    p.set_defaults(func=cmd_clear)

    p = sub.add_parser("standings", help="Show the leaderboard and ties")
    p.add_argument("file", type=Path)
    p.set_defaults(func=cmd_standings)

    p = sub.add_parser("spin", help="Spin the winner wheel")
    p.add_argument("file", type=Path)
    p.add_argument("--tiebreaker", action="store_true", help="Spin once per tie group")
    p.add_argument("--seed", type=int, help="Random seed for reproducibility")
    p.set_defaults(func=cmd_spin)

    p = sub.add_parser("summary", help="Print a plain-text summary")
    p.add_argument("file", type=Path)
    p.set_defaults(func=cmd_summary)

    p = sub.add_parser("reminders", help="List start-time reminders that are due")
    p.add_argument("file", type=Path)
    p.add_argument("--now", help="Check as of this time (ISO-8601, default: now)")
    p.add_argument("--mark", action="store_true", help="Record the due reminders as sent")
    p.set_defaults(func=cmd_reminders)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    try:
        return args.func(args)
    except MatchwheelException as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
