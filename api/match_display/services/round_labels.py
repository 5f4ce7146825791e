"""Round outcome labels for the round timeline."""

from __future__ import annotations

from ..schemas import Round

UNKNOWN_WIN_CONDITION_LABEL = "TBD"

WIN_CONDITION_LABELS: dict[str, str] = {
    "elim": "Elimination",
    "elimination": "Elimination",
    "boom": "Spike Detonated",
    "detonate": "Spike Detonated",
    "bomb": "Spike Detonated",
    "defuse": "Spike Defused",
    "defused": "Spike Defused",
    "time": "Time Expired",
    "timeout": "Time Expired",
}


def win_condition_label(code: str | None) -> str:
    """Map a round win-condition code to its label; unknown or missing codes are "TBD"."""
    if not isinstance(code, str):
        return UNKNOWN_WIN_CONDITION_LABEL
    return WIN_CONDITION_LABELS.get(code.strip().lower(), UNKNOWN_WIN_CONDITION_LABEL)


def is_round_decided(round_: Round) -> bool:
    """A round is decided once both its winner and its win condition are known."""
    return round_.winning_team is not None and round_.win_condition is not None


def last_decided_round_index(rounds: list[Round]) -> int | None:
    """Position of the last decided round, or None when nothing is decided yet."""
    for index in range(len(rounds) - 1, -1, -1):
        if is_round_decided(rounds[index]):
            return index
    return None
