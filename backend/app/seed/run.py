from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from backend.app.api.config import force_author_key_update, initial_author_key
from backend.app.models import AUTHOR_KEY_SETTING, AppSetting

logger = logging.getLogger(__name__)


def seed_author_key(db: Session, key: str | None = None, *, force: bool | None = None) -> str:
    """
    Create the author_key setting if missing.

    An existing key is only overwritten when `force` (or UPDATE_AUTHOR_KEY=true).
    Returns what happened: "created", "updated" or "kept".
    """
    value = key or initial_author_key()
    overwrite = force_author_key_update() if force is None else force

    setting = db.get(AppSetting, AUTHOR_KEY_SETTING)
    if setting is None:
        db.add(AppSetting(key=AUTHOR_KEY_SETTING, value=value))
        db.commit()
        logger.info("Created author_key setting")
        return "created"
    if overwrite:
        setting.value = value
        db.commit()
        logger.info("Updated author_key setting")
        return "updated"
    logger.info("author_key already set; keeping it (set UPDATE_AUTHOR_KEY=true to override)")
    return "kept"


if __name__ == "__main__":
    from backend.app.db import session_scope

    logging.basicConfig(level=logging.INFO)
    with session_scope() as session:
        print(f"author_key: {seed_author_key(session)}")
