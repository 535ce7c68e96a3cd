import pytest

from fxgate.analyzers.location import ToolLocation
from fxgate.api import run_routes
from fxgate.core.config import settings
from fxgate.services.run_service import RunService


@pytest.fixture(autouse=True)
def _quiet_service(monkeypatch):
    monkeypatch.setattr(run_routes, "_run_service", RunService(error_sink=None, warning_sink=None))
    monkeypatch.setattr("fxgate.core.containers.find_installed_tool", ToolLocation.not_found)
    monkeypatch.setattr(settings, "FXCOP_EXECUTABLE", None)
    monkeypatch.setattr(settings, "FXCOP_RULESET_DIR", None)
    monkeypatch.setattr(settings, "FXCOP_REPORT_DIR", None)


@pytest.fixture
def server_exe(monkeypatch, fake_exe):
    monkeypatch.setattr(settings, "FXCOP_EXECUTABLE", fake_exe)
    return fake_exe


def test_run_returns_failed_gate(client, server_exe, fake_fxcop, report_path):
    fake_fxcop["report"] = report_path

    res = client.post("/api/runs", json={"assemblies": ["Contoso.Build.dll"], "rules": ["DesignRules.dll"]})

    assert res.status_code == 200
    data = res.json()
    assert data["succeeded"] is False
    assert len(data["errors"]) == 15
    assert data["warnings"] == []
    assert data["errors"][2]["line"] == 176
    assert fake_fxcop["calls"][0][0] == server_exe
    assert not fake_fxcop["report_target"].exists()


def test_run_with_demoted_errors_passes(client, server_exe, fake_fxcop, report_path):
    fake_fxcop["report"] = report_path

    res = client.post(
        "/api/runs",
        json={"assemblies": ["Contoso.Build.dll"], "rules": ["DesignRules.dll"], "fail_on_error": False},
    )

    data = res.json()
    assert data["succeeded"] is True
    assert data["has_error_class_issues"] is True
    assert len(data["warnings"]) == 15


def test_tool_failure_is_reported_in_body(client, server_exe, fake_fxcop):
    fake_fxcop.update(exit_code=2, stdout="FxCop could not load the rule assembly")

    res = client.post("/api/runs", json={"assemblies": ["A.dll"], "rules": ["Broken.dll"]})

    data = res.json()
    assert res.status_code == 200
    assert data["succeeded"] is False
    assert data["exit_code"] == 2
    assert data["failure"]["kind"] == "execution"
    assert "could not load the rule assembly" in data["output"]


@pytest.mark.parametrize("field", ["executable", "output_path"])
def test_request_cannot_choose_tool_or_report_location(client, server_exe, fake_fxcop, tmp_path, field):
    other = tmp_path / "elsewhere" / "touch-marker.sh"

    res = client.post(
        "/api/runs",
        json={"assemblies": ["A.dll"], "rules": ["R.dll"], field: str(other)},
    )

    assert res.status_code == 422
    assert fake_fxcop["calls"] == []
    assert not other.parent.exists()


def test_reports_kept_under_server_report_dir(client, server_exe, fake_fxcop, report_path, tmp_path, monkeypatch):
    report_dir = tmp_path / "reports"
    monkeypatch.setattr(settings, "FXCOP_REPORT_DIR", str(report_dir))
    fake_fxcop["report"] = report_path

    res = client.post("/api/runs", json={"assemblies": ["Contoso.Build.dll"], "rules": ["DesignRules.dll"]})

    assert res.status_code == 200
    kept = fake_fxcop["report_target"]
    assert kept.parent == report_dir
    assert kept.exists()


def test_incomplete_configuration_is_400(client):
    res = client.post("/api/runs", json={"assemblies": ["A.dll"]})
    assert res.status_code == 400
    assert "Executable was not set" in res.json()["detail"]


def test_no_assemblies_is_400(client, server_exe):
    res = client.post("/api/runs", json={"assemblies": [], "rules": ["R.dll"]})
    assert res.status_code == 400


def test_locate_tool(client, monkeypatch):
    monkeypatch.setattr(run_routes, "find_installed_tool", ToolLocation.not_found)
    data = client.get("/api/tool").json()
    assert data == {
        "found": False,
        "executable": None,
        "rules_directory": None,
        "rule_set_directory": None,
        "rule_assemblies": [],
    }
