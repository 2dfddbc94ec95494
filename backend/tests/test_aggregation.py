from datetime import datetime
from decimal import Decimal
from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[2]))

from backend.app.analytics.core import (
    aggregate_by_category,
    aggregate_by_month,
    bucket_total,
    paginate,
    recent_transactions,
    sort_by_date,
)
from backend.app.norma.normalize import Transaction, normalize_transactions

NOW = datetime(2026, 10, 19, 12, 0)


def _txn(txn_id, amount, date, description=None, account="工商银行"):
    return Transaction(id=txn_id, account=account, amount=amount, date=date, description=description)


def _labels(buckets):
    return [(b.label, b.total) for b in buckets]


def test_scenario_months_and_categories():
    txns = [
        _txn(1, "199.99", "2024-01-15T10:00:00Z", "购物"),
        _txn(2, 88.5, "2024-01-20", "餐饮"),
    ]

    assert _labels(aggregate_by_month(txns)) == [("Jan 2024", Decimal("288.49"))]
    assert _labels(aggregate_by_category(txns)) == [
        ("购物", Decimal("199.99")),
        ("餐饮", Decimal("88.50")),
    ]


def test_months_sort_chronologically_not_by_label():
    txns = [
        _txn(1, 10, "2024-01-05"),
        _txn(2, 20, "2023-12-05"),
        _txn(3, 30, "2023-02-05"),
        _txn(4, 40, "2024-01-25"),
    ]
    buckets = aggregate_by_month(txns)

    assert [b.label for b in buckets] == ["Feb 2023", "Dec 2023", "Jan 2024"]
    assert [b.count for b in buckets] == [1, 1, 2]
    assert buckets[-1].supporting_ids == [1, 4]


def test_month_limit_keeps_most_recent_buckets():
    txns = [_txn(m, 1, f"2024-{m:02d}-01") for m in range(1, 13)]

    buckets = aggregate_by_month(txns, limit=6)

    assert [b.label for b in buckets] == ["Jul 2024", "Aug 2024", "Sep 2024", "Oct 2024", "Nov 2024", "Dec 2024"]
    assert len(aggregate_by_month(txns)) == 12


def test_invalid_dates_skip_months_but_count_in_categories():
    txns = [
        _txn(1, "10.00", "2024-03-01", "交通"),
        _txn(2, "5.50", "not a date", "交通"),
        _txn(3, "7.25", "2024-03-09", None),
    ]

    months = aggregate_by_month(txns)
    categories = aggregate_by_category(txns)

    assert _labels(months) == [("Mar 2024", Decimal("17.25"))]
    assert _labels(categories) == [("交通", Decimal("15.50")), ("Other", Decimal("7.25"))]

    valid_sum = sum(line.amount for line in normalize_transactions(txns) if line.has_valid_date)
    all_sum = sum(line.amount for line in normalize_transactions(txns))
    assert bucket_total(months) == valid_sum
    assert bucket_total(categories) == all_sum


def test_cn_tokens_bucket_into_current_year():
    txns = [_txn(1, 12, "03月05日14:30"), _txn(2, 8, "2026-03-20")]

    assert _labels(aggregate_by_month(txns, now=NOW)) == [("Mar 2026", Decimal("20.00"))]


def test_category_totals_non_increasing_and_ties_keep_first_seen_order():
    txns = [
        _txn(1, 10, "2024-01-01", "b"),
        _txn(2, 30, "2024-01-01", "a"),
        _txn(3, 10, "2024-01-01", "c"),
        _txn(4, 15, "2024-01-01", "b"),
        _txn(5, 15, "2024-01-01", "c"),
    ]
    buckets = aggregate_by_category(txns)

    totals = [b.total for b in buckets]
    assert totals == sorted(totals, reverse=True)
    # b and c both total 25; b appeared first
    assert [b.label for b in buckets] == ["a", "b", "c"]


def test_category_top_n():
    txns = [_txn(i, i, "2024-01-01", f"cat-{i}") for i in range(1, 6)]

    assert [b.label for b in aggregate_by_category(txns, top_n=2)] == ["cat-5", "cat-4"]


def test_aggregation_accepts_normalized_lines():
    lines = normalize_transactions([_txn(1, "1.10", "2024-05-01", "x")])

    assert _labels(aggregate_by_month(lines)) == [("May 2024", Decimal("1.10"))]
    assert _labels(aggregate_by_category(lines)) == [("x", Decimal("1.10"))]


def test_empty_input():
    assert aggregate_by_month([]) == []
    assert aggregate_by_category([]) == []


def test_recent_transactions_takes_leading_rows():
    rows = list(range(10))
    assert recent_transactions(rows, 5) == [0, 1, 2, 3, 4]
    assert recent_transactions(rows[:2], 5) == [0, 1]
    assert recent_transactions(rows, 0) == []


def test_sort_by_date_puts_invalid_last():
    lines = normalize_transactions(
        [
            _txn(1, 1, "2024-01-01"),
            _txn(2, 1, "garbage"),
            _txn(3, 1, "2024-06-01"),
        ]
    )

    assert [line.txn.id for line in sort_by_date(lines)] == [3, 1, 2]
    assert [line.txn.id for line in sort_by_date(lines, descending=False)] == [1, 3, 2]


def test_paginate():
    items = list(range(45))

    first = paginate(items, page=1, page_size=20)
    assert first.items == list(range(20))
    assert (first.total, first.pages) == (45, 3)

    last = paginate(items, page=3, page_size=20)
    assert last.items == list(range(40, 45))

    clamped = paginate(items, page=99, page_size=20)
    assert clamped.page == 3

    empty = paginate([], page=1, page_size=20)
    assert (empty.items, empty.pages) == ([], 1)

    with pytest.raises(ValueError):
        paginate(items, page_size=0)
