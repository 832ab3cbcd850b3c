"""Plain-text tournament summaries for notification collaborators."""

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

from typing import List

from matchwheel.tournament.session import TournamentSession


def format_participant_list(session: TournamentSession) -> str:
    return "\n".join(f"- {p.name}" for p in session.participants)


def format_match_progress(session: TournamentSession) -> str:
    """One line per participant: ``N. name - done/total matches completed``."""
    if session.assignment is None:
        return ""
    lines = []
    for idx, matchup in enumerate(session.assignment, start=1):
        done = sum(1 for m in matchup.matches if m.completed)
        lines.append(
            f"{idx}. {matchup.participant.name} - "
            f"{done}/{len(matchup.matches)} matches completed"
        )
    return "\n".join(lines)


def format_standings(session: TournamentSession) -> str:
    lines = []
    for rank, entry in enumerate(session.standings(), start=1):
        lines.append(
            f"#{rank} {entry.participant.name}: "
            f"{entry.wins}W {entry.losses}L {entry.draws}D"
        )
    return "\n".join(lines)


def build_summary(session: TournamentSession) -> str:
    """Build a human-readable summary of the tournament.

    Covers the tournament name and id, participant count and list, match
    progress, and the leaderboard once matchups exist.
    """
    sections: List[str] = [
        f"Tournament: {session.name}",
        f"Tournament ID: {session.tournament_id}",
        f"Status: {session.status}",
        f"Total Participants: {len(session.participants)}",
        "",
        "Participants",
        format_participant_list(session) or "(none)",
    ]
    if session.assignment is not None:
        sections += [
            "",
            "Match Progress",
            format_match_progress(session),
            "",
            "Standings",
            format_standings(session),
        ]
        if session.under_quota:
            names = ", ".join(p.name for p in session.under_quota)
            sections += ["", f"Short of matches: {names}"]
    return "\n".join(sections)
