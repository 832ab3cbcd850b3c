"""Type hints used in Matchwheel."""

from typing import Any, Dict, List, Literal

# Outcome of a match from one participant's point of view
MatchOutcome = Literal["win", "loss", "draw"]

# Serialized shapes, as persisted by the tournament store
ParticipantDict = Dict[str, Any]
MatchupList = List[Dict[str, Any]]
TournamentSnapshot = Dict[str, Any]
