from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from fxgate.analyzers.location import find_installed_tool
from fxgate.core.config import settings
from fxgate.core.containers import build_configuration, build_run_service
from fxgate.domain.errors import ConfigurationError
from fxgate.services.run_service import RunService

router = APIRouter(prefix="/api", tags=["runs"])

# Build once at module level
_run_service = build_run_service()


# ── Request / Response schemas ────────────────────────────────────
class RunRequest(BaseModel):
    """Request body for a single FxCop gate run.

    The tool and the report location are server-side settings
    (`FXCOP_EXECUTABLE`, `FXCOP_REPORT_DIR`); unknown fields are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    assemblies: list[str] = Field(
        ...,
        description="Compiled assemblies to analyze, in order.",
        json_schema_extra={"examples": [["bin/Release/Contoso.Core.dll"]]},
    )
    ruleset: str | None = Field(None, description="Ruleset file name, e.g. `AllRules.ruleset`.")
    ruleset_dir: str | None = Field(None, description="Directory holding the ruleset.")
    rules: list[str] | None = Field(
        None,
        description="Rule assemblies to load. Used only when no ruleset is selected.",
    )
    dictionary: str | None = Field(None, description="Custom dictionary XML.")
    fail_on_error: bool | None = Field(None, description="Error-class issues fail the run (default true).")
    fail_on_warning: bool | None = Field(None, description="Warning-class issues fail the run (default false).")
    timeout_sec: float | None = Field(None, gt=0, description="Kill FxCop after this many seconds.")


class DiagnosticModel(BaseModel):
    error_code: str
    file: str
    line: int
    message: str
    raw_level: str


class RunResponse(BaseModel):
    """Outcome of a gate run. `succeeded` is the build decision."""

    succeeded: bool
    has_error_class_issues: bool
    has_warning_class_issues: bool
    exit_code: int | None
    failure: dict[str, str] | None = Field(None, description="Set when the run could not complete.")
    output: str = Field("", description="Captured FxCop console output for failed executions.")
    errors: list[DiagnosticModel]
    warnings: list[DiagnosticModel]


class ToolResponse(BaseModel):
    found: bool
    executable: str | None
    rules_directory: str | None
    rule_set_directory: str | None
    rule_assemblies: list[str]


# ── Endpoints ─────────────────────────────────────────────────────
@router.get(
    "/tool",
    response_model=ToolResponse,
    summary="Locate FxCop",
    response_description="The first standard FxCop installation found on this host",
)
def locate_tool() -> dict[str, Any]:
    """Probe the standard FxCop install locations (Visual Studio Team Tools,
    then the standalone FxCop 10.0 install) and report what was found."""
    return find_installed_tool().to_dict()


@router.post(
    "/runs",
    response_model=RunResponse,
    summary="Run the FxCop gate",
    response_description="Build decision plus every issue, routed to the error or warning list",
)
def create_run(req: RunRequest) -> dict[str, Any]:
    """Run FxCop against the given assemblies and classify its report.

    **Steps performed:**
    1. Merge request fields with `FXCOP_*` settings and discovered defaults
    2. Validate the configuration (HTTP 400 when incomplete)
    3. Execute FxCop and parse its XML report
    4. Route each issue by level and the fail-on flags
    5. Return the decision; tool failures come back with `succeeded=false`
    """
    config = build_configuration(
        req.assemblies,
        ruleset=req.ruleset,
        ruleset_dir=req.ruleset_dir,
        rules=req.rules,
        dictionary=req.dictionary,
        output_path=_report_path(),
        fail_on_error=req.fail_on_error,
        fail_on_warning=req.fail_on_warning,
        timeout_sec=req.timeout_sec,
    )

    try:
        RunService.validate(config)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _run_service.run(config).to_dict()


def _report_path() -> str | None:
    """Kept report for this request, or None for a scratch file."""
    if not settings.FXCOP_REPORT_DIR:
        return None
    return str(Path(settings.FXCOP_REPORT_DIR) / f"fxcop-{uuid.uuid4().hex}.xml")
