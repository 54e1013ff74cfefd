"""Codec for delimiter-encoded id/amount pairs.

The packed form ``"1:100;2:50.5"`` only exists at boundaries (command-line
input, exports). It is decoded here into proper entity tuples before reaching
the ledger or snapshot services, and encoded back only on the way out.
"""

from decimal import Decimal
from typing import Iterable

from ledgerdesk.domain.entities import IncomeLine, SnapshotBalance
from ledgerdesk.utils.amount_parser import parse_amount

PAIR_SEPARATOR = ";"
FIELD_SEPARATOR = ":"


def decode_pairs(packed: str) -> list[tuple[int, Decimal]]:
    """Decode ``"id:amount;id:amount"`` into ``(id, amount)`` tuples.

    Empty input decodes to an empty list. Blank segments (e.g. a trailing
    ``;``) are skipped.

    Raises:
        ValueError: If a segment is not ``<int>:<amount>``
    """
    pairs = []
    if not packed or not packed.strip():
        return pairs

    for segment in packed.split(PAIR_SEPARATOR):
        segment = segment.strip()
        if not segment:
            continue
        item_id, sep, amount = segment.partition(FIELD_SEPARATOR)
        if not sep:
            raise ValueError(f"Expected 'id{FIELD_SEPARATOR}amount', got '{segment}'")
        try:
            parsed_id = int(item_id.strip())
        except ValueError:
            raise ValueError(f"Invalid id '{item_id.strip()}' in '{segment}'")
        pairs.append((parsed_id, parse_amount(amount)))
    return pairs


def encode_pairs(pairs: Iterable[tuple[int, Decimal]]) -> str:
    """Encode ``(id, amount)`` tuples into ``"id:amount;id:amount"``."""
    return PAIR_SEPARATOR.join(f"{item_id}{FIELD_SEPARATOR}{amount}" for item_id, amount in pairs)


def decode_lines(packed: str) -> list[IncomeLine]:
    """Decode packed method/amount pairs into income lines."""
    return [IncomeLine(method_id=method_id, amount=amount) for method_id, amount in decode_pairs(packed)]


def encode_lines(lines: Iterable[IncomeLine]) -> str:
    """Encode income lines as ``"methodId:amount;..."``."""
    return encode_pairs((line.method_id, line.amount) for line in lines)


def decode_balances(packed: str) -> list[SnapshotBalance]:
    """Decode packed account/balance pairs into snapshot balances."""
    return [
        SnapshotBalance(account_id=account_id, balance=balance)
        for account_id, balance in decode_pairs(packed)
    ]


def encode_balances(balances: Iterable[SnapshotBalance]) -> str:
    """Encode snapshot balances as ``"accountId:balance;..."``."""
    return encode_pairs((item.account_id, item.balance) for item in balances)
