#!/usr/bin/env python3
"""
Check the SQLite database and initialise it if needed.
Creates the schema when tables are missing and optionally loads the sample data.
"""

import argparse
import os
import sys
from pathlib import Path

# Add the parent directory to sys.path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from northwind_admin.config import load_config
from northwind_admin.db.connection import SQLiteConnection
from northwind_admin.db.schema import create_schema, seed_sample_data

TABLES = ["categories", "suppliers", "customers", "products", "orders", "order_details"]


def main():
    parser = argparse.ArgumentParser(description="Create (and optionally seed) the Northwind database")
    parser.add_argument("--db", help="Database path (defaults to the configured sqlite.db_path)")
    parser.add_argument("--seed", action="store_true", help="Load the sample data into an empty database")
    args = parser.parse_args()

    config = load_config()
    if args.db:
        config["sqlite"]["db_path"] = args.db

    db_path = Path(config["sqlite"]["db_path"])
    print(f"Checking database at {db_path}")
    print(f"Database exists: {db_path.exists()}")

    db = SQLiteConnection(config)
    create_schema(db)

    if args.seed:
        if seed_sample_data(db):
            print("Sample data loaded.")
        else:
            print("Database already has data, sample data not loaded.")

    # Show some stats
    cursor = db.cursor()
    for table in TABLES:
        cursor.execute(f"SELECT COUNT(*) FROM {table}")
        print(f"  {table}: {cursor.fetchone()[0]} rows")

    db.close()
    print("Database check completed.")


if __name__ == "__main__":
    main()
