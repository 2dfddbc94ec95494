from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.db import Base


# -------------------------
# Helpers
# -------------------------

AUTHOR_KEY_SETTING = "author_key"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def uuid_str() -> str:
    return str(uuid.uuid4())


# -------------------------
# Core models
# -------------------------

class Bill(Base):
    """
    One recorded bank transaction.

    Column names follow the persisted layout ("Account", "Amount", ...);
    attribute names are the canonical schema used everywhere else.
    """

    __tablename__ = "bill"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=uuid_str)
    account: Mapped[str] = mapped_column("Account", Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column("Amount", Numeric(10, 2), nullable=False)
    date: Mapped[datetime] = mapped_column("Date", DateTime, default=utcnow, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column("Description", Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)


class AppSetting(Base):
    __tablename__ = "app_settings"

    key: Mapped[str] = mapped_column(String(120), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
