"""Domain contracts and shared types."""

from backend.app.domain.contracts import (  # noqa: F401
    AnalyticsOut,
    AuthorKeyIn,
    AuthorKeyOut,
    BucketOut,
    DashboardAnalyticsOut,
    RecentTransactionsOut,
    TransactionIn,
    TransactionOut,
    TransactionPageOut,
    TransactionPatch,
)
