import shutil
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fxgate.core.util import CmdResult

FIXTURES = Path(__file__).parent / "fixtures"

MIXED_REPORT = """<?xml version="1.0" encoding="utf-8"?>
<FxCopReport Version="10.0">
 <Targets>
  <Target Name="C:\\Build\\bin\\Release\\Mixed.dll">
   <Modules><Module Name="mixed.dll"><Messages>
    <Message TypeName="MarkAssembliesWithClsCompliant" CheckId="CA1014">
     <Issue Level="Error">Mark 'Mixed.dll' with CLSCompliant(true).</Issue>
    </Message>
    <Message TypeName="IdentifiersShouldBeCasedCorrectly" CheckId="CA1709">
     <Issue Level="Warning" Path="C:\\Build\\src" File="Parser.cs" Line="12">Correct the casing of 'xml' in member name 'Parser.xml'.</Issue>
     <Issue Level="CriticalWarning" Path="C:\\Build\\src" File="Parser.cs" Line="30">Correct the casing of 'Id' in type name 'IdMap'.</Issue>
    </Message>
    <Message TypeName="ReviewUnusedParameters" CheckId="CA1801">
     <Issue Level="Information">Parameter 'ctx' of 'Parser.Parse(Context)' is never used.</Issue>
    </Message>
   </Messages></Module></Modules>
  </Target>
 </Targets>
</FxCopReport>
"""


@pytest.fixture
def report_path(tmp_path) -> Path:
    """Copy of the 15-issue report (every issue error-class)."""
    dest = tmp_path / "fxcop_report.xml"
    shutil.copyfile(FIXTURES / "fxcop_report.xml", dest)
    return dest


@pytest.fixture
def mixed_report_path(tmp_path) -> Path:
    """One Error, one Warning, one CriticalWarning, one Information issue."""
    dest = tmp_path / "mixed_report.xml"
    dest.write_text(MIXED_REPORT, encoding="utf-8")
    return dest


@pytest.fixture
def fake_exe(tmp_path) -> str:
    """An executable path that resolves, without needing FxCop on the host."""
    exe = tmp_path / "FxCopCmd.exe"
    exe.write_text("", encoding="utf-8")
    return str(exe)


@pytest.fixture
def fake_fxcop(monkeypatch):
    """Replace run_cmd with a stand-in that writes `report` to the /o: target.

    Returns a dict the test can tweak before running:
    ``report`` (Path or None), ``exit_code``, ``stdout``, ``stderr``; after
    the run ``calls`` holds every argv and ``report_target`` the /o: path.
    """
    state = {"report": None, "exit_code": 0, "stdout": "", "stderr": "", "calls": [], "report_target": None}

    def fake_run_cmd(cmd, cwd=None, timeout_sec=None):
        state["calls"].append(list(cmd))
        out = next(a[len("/o:"):] for a in cmd if a.startswith("/o:"))
        state["report_target"] = Path(out)
        if state["report"] is not None:
            shutil.copyfile(state["report"], out)
        return CmdResult(state["exit_code"], state["stdout"], state["stderr"])

    monkeypatch.setattr("fxgate.analyzers.fxcop.run_cmd", fake_run_cmd)
    return state


@pytest.fixture
def client():
    from fxgate.main import app

    return TestClient(app)
