from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RawAmount = Union[float, int, str]


class TransactionIn(BaseModel):
    """
    New transaction. Legacy field names ("银行名称", "Account", ...) are
    accepted as extra keys and translated by the store.
    """

    model_config = ConfigDict(extra="allow")

    account: Optional[str] = None
    amount: Optional[RawAmount] = None
    date: Optional[str] = None
    description: Optional[str] = None


class TransactionPatch(BaseModel):
    model_config = ConfigDict(extra="allow")

    account: Optional[str] = None
    amount: Optional[RawAmount] = None
    date: Optional[str] = None
    description: Optional[str] = None


class TransactionOut(BaseModel):
    id: Union[str, int]
    account: str
    amount: float
    amount_display: str
    date: Optional[datetime] = None
    date_label: str
    description: Optional[str] = None
    category: str
    created_at: Optional[datetime] = None


class TransactionPageOut(BaseModel):
    is_sample: bool
    page: int
    page_size: int
    total: int
    pages: int
    transactions: List[TransactionOut]


class RecentTransactionsOut(BaseModel):
    is_sample: bool
    transactions: List[TransactionOut]


class BucketOut(BaseModel):
    label: str
    total: float
    count: int
    supporting_ids: List[Any] = Field(default_factory=list)


class DashboardAnalyticsOut(BaseModel):
    computation_version: str
    is_sample: bool
    monthly: List[BucketOut]
    recent: List[TransactionOut]


class AnalyticsTotalsOut(BaseModel):
    all: float
    dated: float
    transaction_count: int
    invalid_date_ids: List[Any]


class AnalyticsOut(BaseModel):
    computation_version: str
    is_sample: bool
    monthly: List[BucketOut]
    categories: List[BucketOut]
    totals: AnalyticsTotalsOut


class AuthorKeyIn(BaseModel):
    key: str = ""


class AuthorKeyOut(BaseModel):
    valid: bool
