from __future__ import annotations

from typing import Sequence

from fxgate.analyzers.fxcop import FxCopAnalyzer
from fxgate.analyzers.location import ToolLocation, find_installed_tool
from fxgate.core.config import settings
from fxgate.domain.models import RunConfiguration
from fxgate.normalizers.fxcop_normalizer import FxCopReportParser
from fxgate.services.run_service import DiagnosticSink, RunService, log_error, log_warning


def build_run_service(
    error_sink: DiagnosticSink | None = log_error,
    warning_sink: DiagnosticSink | None = log_warning,
) -> RunService:
    return RunService(FxCopAnalyzer(), FxCopReportParser(), error_sink=error_sink, warning_sink=warning_sink)


def build_configuration(
    assemblies: Sequence[str],
    *,
    executable: str | None = None,
    ruleset: str | None = None,
    ruleset_dir: str | None = None,
    rules: Sequence[str] | None = None,
    dictionary: str | None = None,
    output_path: str | None = None,
    fail_on_error: bool | None = None,
    fail_on_warning: bool | None = None,
    timeout_sec: float | None = None,
    location: ToolLocation | None = None,
) -> RunConfiguration:
    """Merge explicit arguments, environment settings and install discovery.

    Precedence, highest first:
    1. arguments passed here (CLI flags / API request fields)
    2. ``FXCOP_*`` settings
    3. whatever ``find_installed_tool`` reports
    """
    if not rules:
        ruleset_dir = ruleset_dir or settings.FXCOP_RULESET_DIR
    if ruleset_dir and not ruleset:
        ruleset = settings.FXCOP_RULESET

    if location is None:
        location = find_installed_tool()

    return RunConfiguration.from_location(
        location,
        assemblies,
        executable=executable or settings.FXCOP_EXECUTABLE,
        ruleset=ruleset,
        ruleset_dir=ruleset_dir,
        rules=tuple(rules) if rules else None,
        dictionary=dictionary,
        output_path=output_path,
        fail_on_error=settings.FXCOP_FAIL_ON_ERROR if fail_on_error is None else fail_on_error,
        fail_on_warning=settings.FXCOP_FAIL_ON_WARNING if fail_on_warning is None else fail_on_warning,
        timeout_sec=settings.FXCOP_TIMEOUT_SEC if timeout_sec is None else timeout_sec,
    )
