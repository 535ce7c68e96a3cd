from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from fxgate.domain.errors import MalformedReportError
from fxgate.domain.models import Diagnostic

from .base import ReportParser
from .util import file_name, get_rel_path, join_report_path

_LINE = re.compile(r"^\s*[+-]?\d+\s*$")


class FxCopReportParser(ReportParser):
    """
    Flattens an FxCop XML report into diagnostics.

    Order follows the document: each Target, each Message inside it, each
    Issue inside that. Targets, Messages and Issues are matched as
    descendants, so the Modules/Namespaces/Types nesting FxCop puts in
    between does not matter.
    """

    def tool_name(self) -> str:
        return "fxcop"

    def parse(self, report_path: str | Path) -> list[Diagnostic]:
        p = Path(report_path)
        if not p.is_file():
            raise MalformedReportError(f"FxCop report not found: {p}")

        try:
            root = ET.parse(p).getroot()
        except ET.ParseError as e:
            raise MalformedReportError(f"FxCop report is not well-formed XML ({p}): {e}") from e
        except OSError as e:
            raise MalformedReportError(f"FxCop report could not be read ({p}): {e}") from e

        out: list[Diagnostic] = []
        for target in root.iter("Target"):
            assembly = target.get("Name") or ""
            for message in target.iter("Message"):
                code = error_code(message)
                for issue in message.iter("Issue"):
                    out.append(
                        Diagnostic(
                            error_code=code,
                            file=issue_file(assembly, issue),
                            line=line_number(issue),
                            message=issue_message(issue),
                            raw_level=issue.get("Level") or "",
                        )
                    )
        return out


def error_code(message: ET.Element) -> str:
    return f"{message.get('CheckId') or ''}:{message.get('TypeName') or ''}"


def issue_file(assembly: str, issue: ET.Element) -> str:
    """Source file when the issue carries one, else the analyzed assembly's file name."""
    path = issue.get("Path")
    file = issue.get("File")
    if path and file:
        result = join_report_path(path, file)
    else:
        result = file_name(assembly)

    # targets without a Name have nothing to point at
    return get_rel_path(result) if result else ""


def line_number(issue: ET.Element) -> int:
    line = issue.get("Line")
    if not line:
        return 0
    if not _LINE.match(line):
        raise MalformedReportError(f"Issue has a non-numeric Line attribute: {line!r}")
    return int(line, 10)


def issue_message(issue: ET.Element) -> str:
    # the XML parser has already decoded entities exactly once
    return "".join(issue.itertext()).replace("\r\n", "\n")
