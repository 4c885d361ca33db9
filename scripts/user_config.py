"""Milo User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the report. Expert defaults live in milo.schemas.param.

Usage:
    python scripts/run_report.py scripts/user_config.py exports/*.csv
    python scripts/run_report.py scripts/user_config.py exports/*.csv --output-val area1
"""

CONFIG = {
    # ========================================================================
    # OUTPUT
    # ========================================================================
    "BASE_DIR": "~/milo_output",   # Workbooks go to BASE_DIR/reports, logs to BASE_DIR/logs
    "FILENAME_PATTERN": "{sample_id}_summary.xlsx",

    # ========================================================================
    # REPORT CONTENT
    # ========================================================================
    "OUTPUT_VAL": "%Area2",        # Quantity for the Sum and Stats sheets: area1, area2, %area2
    "SHEETS": ["stats", "sum", "sorted", "pivots", "labelled"],

    "LOG_LEVEL": "INFO",

    # ========================================================================
    # ADVANCED (nested overrides)
    # ========================================================================
    "reader": {
        "delimiter": ",",
        "min_header_columns": 5,
    },
    "workbook": {
        "chunk_gap_rows": 2,
    },
}
