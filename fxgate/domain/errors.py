from __future__ import annotations


class FxGateError(Exception):
    """Base class for every condition that terminates a single run."""

    kind = "error"


class ConfigurationError(FxGateError):
    kind = "configuration"


class LaunchError(FxGateError):
    kind = "launch"


class ExecutionError(FxGateError):
    """The tool started but did not finish cleanly (nonzero exit, timeout)."""

    kind = "execution"

    def __init__(self, message: str, exit_code: int | None, stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr

    @property
    def output(self) -> str:
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


class MalformedReportError(FxGateError):
    kind = "report"
