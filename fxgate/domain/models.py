from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Literal, Sequence

if TYPE_CHECKING:
    from fxgate.analyzers.location import ToolLocation

Sink = Literal["error", "warning"]

DEFAULT_RULESET = "AllRules.ruleset"


@dataclass(frozen=True)
class RunConfiguration:
    executable: str | None
    assemblies: tuple[str, ...]
    ruleset: str | None = None
    ruleset_dir: str | None = None
    rules: tuple[str, ...] = ()
    dictionary: str | None = None
    output_path: str | None = None
    fail_on_error: bool = True
    fail_on_warning: bool = False
    timeout_sec: float | None = None

    def __post_init__(self) -> None:
        # accept any sequence from callers, store tuples
        object.__setattr__(self, "assemblies", tuple(self.assemblies))
        object.__setattr__(self, "rules", tuple(self.rules))

    @property
    def uses_ruleset(self) -> bool:
        return bool(self.ruleset) and bool(self.ruleset_dir)

    @property
    def has_rule_selection(self) -> bool:
        return self.uses_ruleset or len(self.rules) > 0

    @classmethod
    def from_location(
        cls,
        location: "ToolLocation",
        assemblies: Sequence[str],
        **overrides: Any,
    ) -> "RunConfiguration":
        """Build a configuration whose tool and rule defaults come from an install.

        A ruleset directory, when the install ships one, selects the
        ``AllRules.ruleset`` form; otherwise every rule assembly found in the
        install's rules directory is passed explicitly.
        """
        base: dict[str, Any] = {"executable": None, "assemblies": tuple(assemblies)}
        if location.found:
            base["executable"] = location.executable
            if location.rule_set_directory:
                base["ruleset"] = DEFAULT_RULESET
                base["ruleset_dir"] = location.rule_set_directory
            else:
                base["rules"] = location.rule_assemblies
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if overrides.get("rules") and not overrides.get("ruleset_dir"):
            # explicit rule assemblies replace a discovered ruleset
            base.pop("ruleset", None)
            base.pop("ruleset_dir", None)
        base.update(overrides)
        return cls(**base)


@dataclass(frozen=True)
class Diagnostic:
    error_code: str
    file: str
    line: int
    message: str
    raw_level: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def format(self, kind: Sink) -> str:
        return format_message(kind, self.error_code, self.file, self.line, self.message)


def format_message(kind: Sink, error_code: str, file: str, line: int, message: str) -> str:
    """Render a canonical build message line, e.g.
    ``src\\Foo.cs(12): FxCop error CA1801:ReviewUnusedParameters: ...``
    """
    location = f"{file}({line})" if line else file
    return f"{location}: FxCop {kind} {error_code}: {message}"


@dataclass
class RunOutcome:
    succeeded: bool
    has_error_class_issues: bool = False
    has_warning_class_issues: bool = False
    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)
    exit_code: int | None = None
    failure: dict[str, str] | None = None
    output: str = ""

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.errors + self.warnings

    @classmethod
    def failed(cls, kind: str, message: str, exit_code: int | None = None, output: str = "") -> "RunOutcome":
        return cls(
            succeeded=False,
            exit_code=exit_code,
            failure={"kind": kind, "message": message},
            output=output,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "succeeded": self.succeeded,
            "has_error_class_issues": self.has_error_class_issues,
            "has_warning_class_issues": self.has_warning_class_issues,
            "exit_code": self.exit_code,
            "failure": self.failure,
            "output": self.output,
            "errors": [d.to_dict() for d in self.errors],
            "warnings": [d.to_dict() for d in self.warnings],
        }
