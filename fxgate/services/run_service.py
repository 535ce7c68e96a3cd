from __future__ import annotations

import logging
import os
import shutil
import uuid
from typing import Callable

from fxgate.analyzers.base import StaticCodeAnalyzer
from fxgate.analyzers.fxcop import FxCopAnalyzer
from fxgate.domain.errors import ConfigurationError, ExecutionError, FxGateError
from fxgate.domain.models import RunConfiguration, RunOutcome
from fxgate.normalizers.base import ReportParser
from fxgate.normalizers.fxcop_normalizer import FxCopReportParser
from fxgate.normalizers.severity_policy import classify

logger = logging.getLogger(__name__)
diagnostics_logger = logging.getLogger("fxgate.diagnostics")

# (error_code, file, line, message)
DiagnosticSink = Callable[[str, str, int, str], None]


def log_error(error_code: str, file: str, line: int, message: str) -> None:
    diagnostics_logger.error(
        "%s: %s", error_code, message, extra={"error_code": error_code, "file": file, "line": line}
    )


def log_warning(error_code: str, file: str, line: int, message: str) -> None:
    diagnostics_logger.warning(
        "%s: %s", error_code, message, extra={"error_code": error_code, "file": file, "line": line}
    )


class RunService:
    """
    Orchestrates one gate run: validate configuration → run FxCop →
    parse the report → route every issue to the error or warning sink.

    ``run`` never raises for run-level failures; it returns a failed
    ``RunOutcome`` carrying the reason. ``execute`` is the same pipeline
    with the exceptions left to the caller.
    """

    def __init__(
        self,
        analyzer: StaticCodeAnalyzer | None = None,
        parser: ReportParser | None = None,
        error_sink: DiagnosticSink | None = log_error,
        warning_sink: DiagnosticSink | None = log_warning,
    ):
        self.analyzer = analyzer or FxCopAnalyzer()
        self.parser = parser or FxCopReportParser()
        self.error_sink = error_sink
        self.warning_sink = warning_sink

    @staticmethod
    def validate(config: RunConfiguration) -> None:
        exe = config.executable
        if not exe:
            raise ConfigurationError(
                "Executable was not set, and FxCop could not be found in any standard installation locations."
            )
        if shutil.which(exe) is None and not os.path.isfile(exe):
            raise ConfigurationError(f"FxCop executable '{exe}' does not exist.")
        if not config.has_rule_selection:
            raise ConfigurationError(
                "Either a ruleset and ruleset directory must be set, or rule assemblies must be set."
            )
        if not config.assemblies:
            raise ConfigurationError("At least one assembly to analyze must be given.")

    def execute(self, config: RunConfiguration, run_id: str | None = None) -> RunOutcome:
        log = {"run_id": run_id or uuid.uuid4().hex[:12]}
        self.validate(config)

        logger.info("Starting FxCop run on %d assemblies", len(config.assemblies), extra=log)
        with self.analyzer.invoke(config) as invocation:
            diagnostics = self.parser.parse(invocation.report_path)

        outcome = RunOutcome(succeeded=True, exit_code=invocation.exit_code)
        for d in diagnostics:
            c = classify(d.raw_level, config.fail_on_error, config.fail_on_warning)
            outcome.has_error_class_issues |= c.is_error_class
            outcome.has_warning_class_issues |= c.is_warning_class

            if c.sink == "error":
                outcome.errors.append(d)
                sink = self.error_sink
            else:
                outcome.warnings.append(d)
                sink = self.warning_sink
            if sink is not None:
                sink(d.error_code, d.file, d.line, d.message)

        # decided once, after every issue has been delivered
        outcome.succeeded = not (
            (outcome.has_error_class_issues and config.fail_on_error)
            or (outcome.has_warning_class_issues and config.fail_on_warning)
        )

        logger.info(
            "FxCop run %s: %d errors, %d warnings",
            "passed" if outcome.succeeded else "failed",
            len(outcome.errors),
            len(outcome.warnings),
            extra=log,
        )
        return outcome

    def run(self, config: RunConfiguration) -> RunOutcome:
        run_id = uuid.uuid4().hex[:12]
        try:
            return self.execute(config, run_id=run_id)
        except ExecutionError as e:
            logger.error("%s", e, extra={"run_id": run_id})
            return RunOutcome.failed(e.kind, str(e), exit_code=e.exit_code, output=e.output)
        except FxGateError as e:
            logger.error("%s", e, extra={"run_id": run_id})
            return RunOutcome.failed(e.kind, str(e))
