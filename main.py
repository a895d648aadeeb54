#!/usr/bin/env python3
"""
Northwind Admin - Main entry point
"""
import argparse
import sys

from simple_logger import Slogger
from northwind_admin.config import load_config
from northwind_admin.errors import ConfigError


def main(argv=None):
    parser = argparse.ArgumentParser(description="Northwind admin dashboard")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--db", help="SQLite database path (overrides config)")
    parser.add_argument("--no-seed", action="store_true", help="Do not load sample data into an empty database")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 2
    if args.db:
        config["sqlite"]["db_path"] = args.db

    Slogger.configure(config["logging"]["path"], config["logging"]["level"])
    Slogger.log("Starting Northwind admin application...")

    # imported late so a bad config is reported before Textual starts
    from northwind_admin.ui.app import NorthwindApp

    app = NorthwindApp(config, seed=not args.no_seed)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
