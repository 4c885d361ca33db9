"""Command-line interface modules for Milo.

This package contains the runner logic, making scripts/ optional and deletable.
"""

from milo.cli.run_report import run_milo_report

__all__ = ['run_milo_report']
