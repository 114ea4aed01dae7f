"""Grouping engine - clusters ledger transactions into candidate recurring series"""

import re
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List

from cashflow_gateway.domain.models import GroupKey, Transaction, TransactionGroup

MIN_GROUP_SIZE = 2


def normalize_description(description: str) -> str:
    """
    Case-fold and strip a description for grouping.

    "NETFLIX.COM " and "netflix com" both become "netflix com". Descriptions made
    only of punctuation fall back to the case-folded text so they still group.
    """
    folded = description.casefold().strip()
    cleaned = re.sub(r"[^\w\s]", " ", folded)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned or folded


def group_key_for(transaction: Transaction) -> GroupKey:
    return GroupKey(
        description=normalize_description(transaction.description),
        category=transaction.category,
        type=transaction.type,
    )


def select_window(transactions: Iterable[Transaction], start: date, end: date) -> List[Transaction]:
    """Keep transactions dated within [start, end], sorted by date"""
    return sorted(
        (t for t in transactions if start <= t.date <= end),
        key=lambda t: (t.date, t.transaction_id),
    )


def group_transactions(
    transactions: Iterable[Transaction],
    min_size: int = MIN_GROUP_SIZE,
) -> List[TransactionGroup]:
    """
    Cluster transactions by normalized description + category.

    Income and expense entries under the same description/category land in
    separate subgroups because the type is part of the key, so a refund never
    pollutes the statistics of the charge it reverses. Groups below min_size
    are discarded: no interval can be measured from a single occurrence.

    Returns:
        Groups ordered by key, members sorted by date ascending
    """
    buckets: Dict[GroupKey, List[Transaction]] = defaultdict(list)
    for txn in transactions:
        buckets[group_key_for(txn)].append(txn)

    groups = []
    for key in sorted(buckets):
        members = buckets[key]
        if len(members) < max(min_size, MIN_GROUP_SIZE):
            continue
        members.sort(key=lambda t: (t.date, t.transaction_id))
        groups.append(TransactionGroup(key=key, transactions=members))

    return groups
