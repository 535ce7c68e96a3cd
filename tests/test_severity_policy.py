import pytest

from fxgate.normalizers.severity_policy import classify


@pytest.mark.parametrize("level", ["Error", "error", "ERROR", "CriticalError", "criticalerror"])
def test_error_levels_go_to_error_sink_when_failing_on_errors(level):
    c = classify(level, fail_on_error=True, fail_on_warning=False)
    assert c.sink == "error"
    assert c.is_error_class
    assert not c.is_warning_class


@pytest.mark.parametrize("level", ["Error", "CriticalError"])
def test_error_levels_are_demoted_but_still_flagged(level):
    c = classify(level, fail_on_error=False, fail_on_warning=False)
    assert c.sink == "warning"
    assert c.is_error_class


@pytest.mark.parametrize("level", ["Warning", "warning", "CriticalWarning"])
def test_warning_levels_escalate_when_failing_on_warnings(level):
    c = classify(level, fail_on_error=False, fail_on_warning=True)
    assert c.sink == "error"
    assert c.is_warning_class
    assert not c.is_error_class


def test_warning_level_stays_a_warning_by_default():
    c = classify("Warning", fail_on_error=True, fail_on_warning=False)
    assert c.sink == "warning"
    assert c.is_warning_class


def test_critical_error_is_not_mistaken_for_a_warning():
    c = classify("CriticalError", fail_on_error=False, fail_on_warning=True)
    assert c.is_error_class
    assert not c.is_warning_class
    assert c.sink == "warning"


@pytest.mark.parametrize("level", ["Information", "Informational", "", None, "ErrorButNotReally"])
def test_other_levels_are_accepted_and_go_to_warning_sink(level):
    for fail_on_error in (True, False):
        for fail_on_warning in (True, False):
            c = classify(level, fail_on_error, fail_on_warning)
            assert c.sink == "warning"
            assert not c.is_error_class
            assert not c.is_warning_class


def test_every_level_lands_in_exactly_one_sink():
    for level in ["Error", "CriticalError", "Warning", "CriticalWarning", "Information"]:
        for fail_on_error in (True, False):
            for fail_on_warning in (True, False):
                assert classify(level, fail_on_error, fail_on_warning).sink in {"error", "warning"}
