from __future__ import annotations

import hmac
import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.models import AUTHOR_KEY_SETTING, AppSetting, Bill
from backend.app.norma.amounts import parse_amount
from backend.app.norma.dates import parse_date
from backend.app.norma.normalize import Transaction, TxnId
from backend.app.services.errors import StoreError, TransactionNotFoundError, TransactionValidationError

logger = logging.getLogger(__name__)

CANONICAL_FIELDS = ("account", "amount", "date", "description")

# older rows/clients used bilingual or capitalized column names
FIELD_ALIASES: Dict[str, str] = {
    "银行名称": "account",
    "Account": "account",
    "bankName": "account",
    "消费金额": "amount",
    "Amount": "amount",
    "消费时间": "date",
    "Date": "date",
    "消费用途": "description",
    "Description": "description",
}


class TransactionStore(Protocol):
    def list(self) -> List[Transaction]:
        ...

    def insert(self, row: Mapping[str, Any]) -> Transaction:
        ...

    def update(self, txn_id: TxnId, partial: Mapping[str, Any]) -> Transaction:
        ...

    def validate_key(self, key: str) -> bool:
        ...


def canonical_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Translate legacy field names into the canonical schema.
    Canonical keys win over aliases; unknown keys are dropped.
    """
    out: Dict[str, Any] = {}
    for key, value in payload.items():
        target = FIELD_ALIASES.get(key)
        if target and target not in payload:
            out[target] = value
    for key in CANONICAL_FIELDS:
        if key in payload:
            out[key] = payload[key]
    return out


def _to_transaction(bill: Bill) -> Transaction:
    return Transaction(
        id=bill.id,
        account=bill.account,
        amount=bill.amount,
        date=bill.date.isoformat() if bill.date else None,
        description=bill.description,
        created_at=bill.created_at,
    )


def _clean_account(value: Any) -> str:
    account = str(value or "").strip()
    if not account:
        raise TransactionValidationError("account is required")
    return account


def _clean_amount(value: Any) -> Decimal:
    amount = parse_amount(value)
    if amount is None:
        raise TransactionValidationError(f"invalid amount: {value!r}")
    return amount


def _clean_date(value: Any):
    parsed = parse_date(value)
    if parsed is None:
        raise TransactionValidationError(f"invalid date: {value!r}")
    return parsed


def _clean_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class SqlTransactionStore:
    """TransactionStore over the `bill` / `app_settings` tables."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self) -> List[Transaction]:
        try:
            rows = (
                self.db.execute(select(Bill).order_by(Bill.date.desc(), Bill.created_at.desc()))
                .scalars()
                .all()
            )
        except SQLAlchemyError as exc:
            raise StoreError(f"failed to list transactions: {exc}") from exc
        return [_to_transaction(b) for b in rows]

    def insert(self, row: Mapping[str, Any]) -> Transaction:
        fields = canonical_fields(row)
        bill = Bill(
            account=_clean_account(fields.get("account")),
            amount=_clean_amount(fields.get("amount")),
            date=_clean_date(fields.get("date")),
            description=_clean_description(fields.get("description")),
        )
        try:
            self.db.add(bill)
            self.db.commit()
            self.db.refresh(bill)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(str(exc)) from exc
        logger.info("Inserted transaction id=%s", bill.id)
        return _to_transaction(bill)

    def update(self, txn_id: TxnId, partial: Mapping[str, Any]) -> Transaction:
        fields = canonical_fields(partial)
        try:
            bill = self.db.get(Bill, str(txn_id))
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        if bill is None:
            raise TransactionNotFoundError(f"transaction {txn_id} not found")

        # all fields validated before the row is touched
        changes: Dict[str, Any] = {}
        if "account" in fields:
            changes["account"] = _clean_account(fields["account"])
        if "amount" in fields:
            changes["amount"] = _clean_amount(fields["amount"])
        if "date" in fields:
            changes["date"] = _clean_date(fields["date"])
        if "description" in fields:
            changes["description"] = _clean_description(fields["description"])

        for attr, value in changes.items():
            setattr(bill, attr, value)
        try:
            self.db.commit()
            self.db.refresh(bill)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(str(exc)) from exc
        logger.info("Updated transaction id=%s fields=%s", bill.id, sorted(fields))
        return _to_transaction(bill)

    def validate_key(self, key: str) -> bool:
        try:
            setting = self.db.get(AppSetting, AUTHOR_KEY_SETTING)
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        if setting is None or not setting.value:
            return False
        return hmac.compare_digest(setting.value.encode("utf-8"), str(key).encode("utf-8"))
