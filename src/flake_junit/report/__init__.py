"""JUnit XML reporting."""

from flake_junit.report.junit import (
    FAILURE_MESSAGE,
    FAILURE_TYPE,
    SUITE_NAME,
    build_report_tree,
    synthesize_report,
    write_report,
)

__all__ = [
    "FAILURE_MESSAGE",
    "FAILURE_TYPE",
    "SUITE_NAME",
    "build_report_tree",
    "synthesize_report",
    "write_report",
]
