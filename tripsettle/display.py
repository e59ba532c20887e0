"""
Human-readable labels for participants and transfers.

Only used when showing results to a person; settlement itself works on
raw participant ids.
"""
from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from tripsettle.models import ParticipantId, Transfer

DEFAULT_LOCALE = "en-US"

YOU_LABELS = {
    "en-US": "You",
    "zh-TW": "你 (You)",
    "ja-JP": "あなた (You)",
}

UNKNOWN_LABEL = "Unknown"
NO_DEBTS_LINE = "No debts found!"

# Ids longer than this are shortened to a prefix
TRUNCATE_AT = 4


def you_label(locale: Optional[str] = None) -> str:
    return YOU_LABELS.get(locale or DEFAULT_LOCALE, YOU_LABELS[DEFAULT_LOCALE])


def display_name(
    participant_id: Optional[ParticipantId],
    viewer_id: Optional[ParticipantId] = None,
    known_names: Optional[Mapping[ParticipantId, str]] = None,
    locale: str = DEFAULT_LOCALE,
    self_marker: Optional[ParticipantId] = None,
) -> str:
    """
    Label *participant_id* for the person identified by *viewer_id*.

    The viewer (and anyone recorded under *self_marker*, for data entered
    before the viewer had an account) reads as "you". Otherwise the known
    name is used, falling back to a shortened id.
    """
    if not participant_id:
        return UNKNOWN_LABEL
    if participant_id == viewer_id or (self_marker is not None and participant_id == self_marker):
        return you_label(locale)
    if known_names and known_names.get(participant_id):
        return known_names[participant_id]
    participant_id = str(participant_id)
    if len(participant_id) > TRUNCATE_AT:
        return participant_id[:TRUNCATE_AT] + "..."
    return participant_id


def format_amount(amount: float, precision: Optional[int] = None) -> str:
    if precision is not None:
        return f"${amount:.{precision}f}"
    if float(amount).is_integer():
        return f"${amount:.0f}"
    return f"${amount:.2f}"


def settlement_lines(
    transfers: Iterable[Transfer],
    viewer_id: Optional[ParticipantId] = None,
    known_names: Optional[Mapping[ParticipantId, str]] = None,
    locale: str = DEFAULT_LOCALE,
    self_marker: Optional[ParticipantId] = None,
    precision: Optional[int] = None,
) -> List[str]:
    def name(pid):
        return display_name(pid, viewer_id, known_names, locale, self_marker)

    lines = [
        f"{name(t.from_id)} owes {name(t.to_id)} {format_amount(t.amount, precision)}"
        for t in transfers
    ]
    return lines if len(lines) > 0 else [NO_DEBTS_LINE]
