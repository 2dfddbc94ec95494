from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional

from backend.app.norma.normalize import Transaction

# (id, account, amount, description, days ago)
_SAMPLE_ROWS = (
    (1, "工商银行", 199.99, "购物", 0),
    (2, "招商银行", 88.50, "餐饮", 1),
    (3, "建设银行", 35.00, "交通", 2),
)


def sample_transactions(now: Optional[datetime] = None) -> List[Transaction]:
    """Fixed fallback rows, dated relative to `now`, newest first."""
    current = now or datetime.now()
    return [
        Transaction(
            id=txn_id,
            account=account,
            amount=amount,
            date=(current - timedelta(days=days_ago)).isoformat(),
            description=description,
        )
        for txn_id, account, amount, description, days_ago in _SAMPLE_ROWS
    ]
