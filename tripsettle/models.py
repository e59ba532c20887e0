"""
Data models for trip expense settlement.
"""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, NewType, Optional, Tuple

ParticipantId = NewType("ParticipantId", str)


class PayloadError(ValueError):
    """Raised when a request body cannot be turned into expense records."""


def to_amount(value, what: str) -> float:
    if isinstance(value, bool):
        raise PayloadError(f"{what} must be a number, got {value!r}")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise PayloadError(f"{what} must be a number, got {value!r}") from None
    if not math.isfinite(amount):
        raise PayloadError(f"{what} must be finite, got {value!r}")
    return amount


def parse_splits(raw) -> Optional[Dict[ParticipantId, float]]:
    """
    Accept ``{person: amount}`` or ``[{"person": ..., "amount": ...}]``.
    Returns None when no splits were given.
    """
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return {ParticipantId(str(p)): to_amount(a, f"split for {p}") for p, a in raw.items()}
    if isinstance(raw, list):
        splits: Dict[ParticipantId, float] = {}
        for item in raw:
            if not isinstance(item, Mapping) or "person" not in item:
                raise PayloadError(f"split entries need a 'person' and an 'amount', got {item!r}")
            person = ParticipantId(str(item["person"]))
            splits[person] = splits.get(person, 0.0) + to_amount(item.get("amount"), f"split for {person}")
        return splits
    raise PayloadError(f"splits must be an object or a list, got {type(raw).__name__}")


@dataclass(frozen=True)
class ExpenseRecord:
    """Single shared expense, already converted to the trip's base currency"""
    id: str
    amount: float
    payer: ParticipantId
    participants: Tuple[ParticipantId, ...] = ()
    splits: Optional[Mapping[ParticipantId, float]] = None

    @classmethod
    def from_dict(cls, data) -> "ExpenseRecord":
        if not isinstance(data, Mapping):
            raise PayloadError(f"expense must be an object, got {type(data).__name__}")
        payer = data.get("payer")
        if payer is None or payer == "":
            raise PayloadError("expense is missing a payer")
        if "amount" not in data:
            raise PayloadError("expense is missing an amount")

        # 'involved' is what the older front end sends
        people = data.get("participants")
        if people is None:
            people = data.get("involved")
        if people is None:
            people = []
        if isinstance(people, str) or not isinstance(people, (list, tuple)):
            raise PayloadError("participants must be a list")

        return cls(
            id=str(data.get("id") or uuid.uuid4().hex),
            amount=to_amount(data["amount"], "amount"),
            payer=ParticipantId(str(payer)),
            participants=tuple(ParticipantId(str(p)) for p in people),
            splits=parse_splits(data.get("splits")),
        )


@dataclass(frozen=True)
class Transfer:
    """Instruction for one participant to pay another"""
    from_id: ParticipantId
    to_id: ParticipantId
    amount: float

    def to_dict(self) -> dict:
        return {"from": self.from_id, "to": self.to_id, "amount": self.amount}


@dataclass
class DebtSummary:
    """Who a participant owes and who owes them, after settlement"""
    person: ParticipantId
    net_balance: float  # positive = is owed money; negative = owes money
    owes: List[Tuple[ParticipantId, float]] = field(default_factory=list)
    owed_by: List[Tuple[ParticipantId, float]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "person": self.person,
            "net_balance": self.net_balance,
            "owes": [{"to": to, "amount": amt} for to, amt in self.owes],
            "owed_by": [{"from": frm, "amount": amt} for frm, amt in self.owed_by],
        }
