#!/usr/bin/env python3
"""``Milo`` summary report runner.

Usage:
    python scripts/run_report.py scripts/user_config.py exports/ag05_*.csv
    python scripts/run_report.py scripts/user_config.py exports/ag05_*.csv --output-val area2
    python scripts/run_report.py - exports/ag05_*.csv --base-dir /tmp/milo

Note: User config in scripts/user_config.py, expert defaults in milo.schemas.param
"""

from milo.cli.run_report import main


if __name__ == "__main__":
    raise SystemExit(main())
