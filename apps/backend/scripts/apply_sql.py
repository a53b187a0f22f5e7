#!/usr/bin/env python3
"""
Apply the Jobly schema (and optionally seed data) to the configured database.
Idempotent for the schema; --reset truncates every table first.
"""
import sys
import argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from app.db import connect
from app.db_config import get_database_url, mask_database_url
from app.schema import SCHEMA_SQL, SEED_SQL, TRUNCATE_SQL


def get_table_summary(db) -> dict:
    """Get summary of tables and their row counts."""
    rows = db.execute("""
        SELECT table_name
        FROM information_schema.tables
        WHERE table_schema = 'public'
        ORDER BY table_name
    """)

    summary = {}
    for row in rows:
        table = row["table_name"]
        count = db.execute(f"SELECT COUNT(*) AS count FROM {table}")[0]["count"]
        summary[table] = count

    return summary


def main():
    parser = argparse.ArgumentParser(
        description="Apply Jobly SQL schema and seed data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python apply_sql.py                  # Apply schema only
  python apply_sql.py --seed           # Apply schema and seed data
  python apply_sql.py --reset --seed   # Empty all tables, then seed
        """
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Also apply seed data after schema",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Truncate all tables after applying the schema",
    )
    args = parser.parse_args()

    print(f"Database: {mask_database_url(get_database_url())}")
    db = connect()
    try:
        db.execute(SCHEMA_SQL)
        print("✓ Schema applied")

        if args.reset:
            db.execute(TRUNCATE_SQL)
            print("✓ Tables truncated")

        if args.seed:
            db.execute(SEED_SQL)
            print("✓ Seed data applied")

        print()
        for table, count in get_table_summary(db).items():
            print(f"  {table}: {count} rows")
    finally:
        db.close()


if __name__ == "__main__":
    main()
