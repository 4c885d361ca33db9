"""Pipeline modules.

- orchestrator: Batch report runner
"""

from milo.pipeline.orchestrator import ReportOrchestrator, run_report

__all__ = [
    "ReportOrchestrator",
    "run_report",
]
