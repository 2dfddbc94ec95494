"""
Pre-flight check for a Ledgerlite database.

Reports the migration state and whether the author key has been seeded.
Exit status is non-zero when anything needs attention, so it can gate a
deploy step.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set

from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import make_url

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"
REQUIRED_TABLES = ("bill", "app_settings")


@dataclass
class SanityReport:
    url: str
    heads: List[str]
    revision: Optional[str] = None
    tables: Set[str] = field(default_factory=set)
    has_author_key: bool = False
    bill_count: int = 0

    def problems(self, script: ScriptDirectory) -> List[str]:
        found = []
        if len(self.heads) != 1:
            found.append(f"expected one alembic head, found {self.heads}")
        if self.revision is None:
            found.append("no alembic revision recorded; run `alembic upgrade head`")
        elif script.get_revision(self.revision) is None:
            found.append(f"DB revision {self.revision} is unknown to this checkout")
        found.extend(f"table {name!r} missing" for name in REQUIRED_TABLES if name not in self.tables)
        if not self.has_author_key:
            found.append("author_key not seeded; run `python -m backend.app.seed.run`")
        return found


def _database_url() -> str:
    url = os.getenv("DATABASE_URL") or os.getenv("SQLALCHEMY_DATABASE_URL")
    url = url or Config(str(ALEMBIC_INI)).get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError("No DATABASE_URL or sqlalchemy.url configured.")
    return url


def collect(database_url: str, script: ScriptDirectory) -> SanityReport:
    report = SanityReport(
        url=make_url(database_url).render_as_string(hide_password=True),
        heads=list(script.get_heads()),
    )
    engine = create_engine(database_url, future=True)
    try:
        with engine.connect() as conn:
            report.tables = set(inspect(conn).get_table_names())
            if "alembic_version" in report.tables:
                report.revision = conn.execute(text("SELECT version_num FROM alembic_version")).scalar()
            if "app_settings" in report.tables:
                found = conn.execute(text("SELECT 1 FROM app_settings WHERE key = 'author_key'")).first()
                report.has_author_key = found is not None
            if "bill" in report.tables:
                report.bill_count = conn.execute(text("SELECT COUNT(*) FROM bill")).scalar() or 0
    finally:
        engine.dispose()
    return report


def main() -> int:
    script = ScriptDirectory.from_config(Config(str(ALEMBIC_INI)))
    report = collect(_database_url(), script)

    print("Ledgerlite DB sanity")
    print(f"  url:        {report.url}")
    print(f"  heads:      {report.heads}")
    print(f"  revision:   {report.revision}")
    print(f"  bills:      {report.bill_count}")
    print(f"  author key: {'seeded' if report.has_author_key else 'missing'}")

    problems = report.problems(script)
    if problems:
        print("\nProblems:")
        for problem in problems:
            print(f"  - {problem}")
        return 1

    print("\nOK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
