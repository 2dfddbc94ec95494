from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from backend.app.services.errors import AuthorKeyRequiredError
from backend.app.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

ONE_WEEK_SECONDS = 7 * 24 * 60 * 60


@dataclass(frozen=True)
class DataSource:
    use_sample: bool


def resolve_data_source(key: Optional[str], store: TransactionStore) -> DataSource:
    """
    Decide between real rows and the sample set.

    An empty key never reaches the store. A failing or non-True validation
    falls back to sample data. Every call re-validates.
    """
    if not key:
        return DataSource(use_sample=True)
    try:
        valid = store.validate_key(key)
    except Exception as exc:
        logger.warning("Author key validation failed, using sample data: %s", exc)
        return DataSource(use_sample=True)
    if valid is not True:
        logger.warning("Author key rejected, using sample data")
        return DataSource(use_sample=True)
    return DataSource(use_sample=False)


def require_author_key(
    key: Optional[str],
    store: TransactionStore,
    *,
    action: str = "modify transactions",
) -> None:
    """Writes never degrade to sample data; they fail instead."""
    if resolve_data_source(key, store).use_sample:
        raise AuthorKeyRequiredError(action)


class KeyValidityCache:
    """
    Session-level memo of positive key checks.

    Sits outside the gate: a key validated within `ttl_seconds` is reported
    valid without another store call. Rejections are never cached.
    """

    def __init__(
        self,
        ttl_seconds: float = ONE_WEEK_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._validated_at: Dict[str, float] = {}

    def is_valid(self, key: Optional[str], store: TransactionStore) -> bool:
        if not key:
            return False
        stamp = self._validated_at.get(key)
        now = self.clock()
        if stamp is not None and now - stamp <= self.ttl_seconds:
            return True
        self._validated_at.pop(key, None)

        if resolve_data_source(key, store).use_sample:
            return False
        self._validated_at[key] = now
        return True

    def forget(self, key: str) -> None:
        self._validated_at.pop(key, None)
