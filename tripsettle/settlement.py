"""
Group expense settlement.

Expenses are folded into one net balance per participant (positive means
the participant is owed money, negative means they owe money), then the
largest debtor is repeatedly matched with the largest creditor until every
balance is settled.
"""
from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Dict, Iterable, List, Mapping, Sequence

from tripsettle.models import DebtSummary, ExpenseRecord, ParticipantId, Transfer

logger = logging.getLogger(__name__)

# Balances within this distance of zero count as settled.
SETTLED_EPSILON = 0.01


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a cashier does: 0.5 always goes away from zero."""
    if not math.isfinite(value):
        return value
    d = Decimal(str(value))
    with localcontext() as ctx:
        # enough digits to hold the integer part plus the kept decimals
        ctx.prec = max(28, d.adjusted() + places + 2)
        return float(d.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def aggregate(expenses: Iterable[ExpenseRecord], roster: Iterable[ParticipantId]) -> Dict[ParticipantId, float]:
    """
    Fold *expenses* into a net balance per participant.

    Every roster member starts at zero. For each expense the payer is
    credited the full amount and each member of the divisor set is debited
    their share: the explicit ``splits`` amounts when present, otherwise an
    equal part of the amount. The divisor set falls back to the expense's
    participants, then the whole roster, then the payer alone.

    Nothing is validated here. Negative amounts and splits that do not add
    up to the amount flow straight into the balances.
    """
    roster = list(dict.fromkeys(roster))
    balances: Dict[ParticipantId, float] = {p: 0.0 for p in roster}

    for expense in expenses:
        payer = expense.payer
        if payer not in balances:
            balances[payer] = 0.0
        balances[payer] += expense.amount

        if expense.splits:
            for person, owed in expense.splits.items():
                if person not in balances:
                    balances[person] = 0.0
                balances[person] -= owed
            continue

        if expense.participants:
            divisor = list(dict.fromkeys(expense.participants))
        elif roster:
            divisor = roster
        else:
            divisor = [payer]

        share = expense.amount / len(divisor)
        for person in divisor:
            if person not in balances:
                balances[person] = 0.0
            balances[person] -= share

    return balances


def minimize(balances: Mapping[ParticipantId, float], precision: int = 0) -> List[Transfer]:
    """
    Produce transfers that settle *balances*.

    Greedy matching of the most indebted participant with the most owed
    one; not guaranteed to be the absolute minimum number of transfers,
    but never more than n - 1 transfers for n unsettled participants.
    Emitted amounts are rounded to *precision* decimal places, the
    running balances are not.
    """
    # 1. Separate debtors and creditors
    debtors = []
    creditors = []
    for person, amount in balances.items():
        # inf and nan cannot be paid off, leave them out
        if not math.isfinite(amount):
            continue
        net = round_half_up(amount, 2)
        if net < -SETTLED_EPSILON:
            debtors.append([person, net])
        elif net > SETTLED_EPSILON:
            creditors.append([person, net])

    # Ties go to the lower identifier so dict order never leaks into the result
    debtors.sort(key=lambda d: (d[1], d[0]))
    creditors.sort(key=lambda c: (-c[1], c[0]))

    # 2. Match them up
    transfers: List[Transfer] = []
    i = 0
    j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(abs(debtor[1]), creditor[1])
        if amount > 0:
            rounded = round_half_up(amount, precision)
            if rounded > 0:
                transfers.append(Transfer(debtor[0], creditor[0], rounded))

        debtor[1] += amount
        creditor[1] -= amount

        if abs(debtor[1]) < SETTLED_EPSILON:
            i += 1
        if creditor[1] < SETTLED_EPSILON:
            j += 1

    logger.debug(
        "Settled %d debtors and %d creditors with %d transfers",
        len(debtors), len(creditors), len(transfers),
    )
    return transfers


def calculate_settlements(
    expenses: Iterable[ExpenseRecord],
    roster: Iterable[ParticipantId] = (),
    precision: int = 0,
) -> List[Transfer]:
    return minimize(aggregate(expenses, roster), precision=precision)


def summarize(balances: Mapping[ParticipantId, float], transfers: Sequence[Transfer]) -> List[DebtSummary]:
    """Per-participant view of *transfers*, ordered by participant id."""
    summaries = {
        person: DebtSummary(person=person, net_balance=round_half_up(balances[person], 2))
        for person in sorted(balances)
    }
    for t in transfers:
        # transfers may name people the balance map did not
        for person in (t.from_id, t.to_id):
            if person not in summaries:
                summaries[person] = DebtSummary(person=person, net_balance=0.0)
        summaries[t.from_id].owes.append((t.to_id, t.amount))
        summaries[t.to_id].owed_by.append((t.from_id, t.amount))
    return [summaries[p] for p in sorted(summaries)]


def even_split(total: float, participants: Sequence[ParticipantId]) -> Dict[ParticipantId, float]:
    if not participants:
        return {}
    per_person = total / len(participants)
    return {person: per_person for person in participants}
