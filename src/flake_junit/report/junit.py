"""JUnit XML report for flake checks.

Layout::

    <testsuites>
      <testsuite id="0" name="nix flake checks" ...>
        <testcase name="..." time="..."/>
        <testcase name="..." time="...">
          <failure type="nix check" message="build failed"/>
          <system-out>build log</system-out>
        </testcase>
      </testsuite>
    </testsuites>
"""

import re
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from flake_junit.checks.models import CheckOutcome
from flake_junit.core.exceptions.errors import ArtifactWriteError
from flake_junit.core.logger.logger import get_logger

logger = get_logger(__name__)

SUITE_NAME = "nix flake checks"
FAILURE_TYPE = "nix check"
FAILURE_MESSAGE = "build failed"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'

# Characters that XML 1.0 cannot represent, e.g. the ESC of ANSI colour codes
# in nix build logs.
_INVALID_XML_CHARS = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)


def _xml_text(text: str) -> str:
    return _INVALID_XML_CHARS.sub("\ufffd", text)


def _seconds(value: float) -> str:
    return f"{value:.3f}"


def build_report_tree(
    outcomes: Sequence[CheckOutcome],
    timestamp: datetime | None = None,
) -> ET.Element:
    """Build the ``<testsuites>`` element for the given outcomes.

    Args:
        outcomes: Check outcomes in the order they were produced.
        timestamp: Suite timestamp, defaults to now (UTC).

    Returns:
        The root element.
    """
    timestamp = timestamp or datetime.now(UTC)
    failures = sum(1 for o in outcomes if not o.succeeded)
    total_time = sum(o.duration_seconds for o in outcomes)

    root = ET.Element("testsuites")
    suite = ET.SubElement(
        root,
        "testsuite",
        {
            "id": "0",
            "name": SUITE_NAME,
            "package": f"testsuite/{SUITE_NAME}",
            "tests": str(len(outcomes)),
            "errors": "0",
            "failures": str(failures),
            "hostname": "localhost",
            "timestamp": timestamp.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "time": _seconds(total_time),
        },
    )

    for outcome in outcomes:
        case = ET.SubElement(
            suite,
            "testcase",
            {"name": _xml_text(outcome.name), "time": _seconds(outcome.duration_seconds)},
        )
        if outcome.succeeded:
            logger.debug(f"Creating success case for {outcome.name}")
            continue

        logger.debug(f"Creating failure case for {outcome.name}")
        ET.SubElement(case, "failure", {"type": FAILURE_TYPE, "message": FAILURE_MESSAGE})
        system_out = ET.SubElement(case, "system-out")
        system_out.text = _xml_text(outcome.log_output or "")

    return root


def synthesize_report(
    outcomes: Sequence[CheckOutcome],
    timestamp: datetime | None = None,
) -> bytes:
    """Serialize check outcomes into a JUnit XML document.

    Args:
        outcomes: Check outcomes in the order they were produced.
        timestamp: Suite timestamp, defaults to now (UTC).

    Returns:
        The UTF-8 encoded document.
    """
    root = build_report_tree(outcomes, timestamp)
    ET.indent(root)
    document = XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"
    return document.encode("utf-8")


def write_report(data: bytes, output_path: Path) -> None:
    """Write the report, replacing any existing file.

    Args:
        data: Serialized report.
        output_path: Destination file.

    Raises:
        ArtifactWriteError: If the file cannot be written.
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as e:
        raise ArtifactWriteError(
            f"Could not write report to '{output_path}': {e}",
            path=output_path,
        ) from e
