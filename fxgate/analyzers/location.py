from __future__ import annotations

import glob
import os
from dataclasses import dataclass, field
from typing import Mapping

EXECUTABLE_NAME = "FxCopCmd.exe"

# (env var, path segments to FxCopCmd.exe's directory, segments to the rule set dir or None)
_CANDIDATES: list[tuple[str, tuple[str, ...], tuple[str, ...] | None]] = [
    (
        "VS100COMNTOOLS",
        ("..", "..", "Team Tools", "Static Analysis Tools", "FxCop"),
        ("..", "..", "Team Tools", "Static Analysis Tools", "Rule Sets"),
    ),
    ("ProgramFiles(x86)", ("Microsoft Fxcop 10.0",), None),
    ("PROGRAMFILES", ("Microsoft Fxcop 10.0",), None),
]


@dataclass(frozen=True)
class ToolLocation:
    found: bool
    executable: str | None = None
    rules_directory: str | None = None
    rule_set_directory: str | None = None
    rule_assemblies: tuple[str, ...] = field(default=())

    @classmethod
    def not_found(cls) -> "ToolLocation":
        return cls(found=False)

    @classmethod
    def at(cls, executable: str, rules_directory: str, rule_set_directory: str | None = None) -> "ToolLocation":
        rules_directory = os.path.abspath(rules_directory)
        assemblies = tuple(sorted(glob.glob(os.path.join(rules_directory, "*.dll"))))
        return cls(
            found=True,
            executable=os.path.abspath(executable),
            rules_directory=rules_directory,
            rule_set_directory=(
                os.path.abspath(rule_set_directory)
                if rule_set_directory and os.path.isdir(rule_set_directory)
                else None
            ),
            rule_assemblies=assemblies,
        )

    def to_dict(self) -> dict:
        return {
            "found": self.found,
            "executable": self.executable,
            "rules_directory": self.rules_directory,
            "rule_set_directory": self.rule_set_directory,
            "rule_assemblies": list(self.rule_assemblies),
        }


def find_installed_tool(environ: Mapping[str, str] | None = None) -> ToolLocation:
    """Probe the standard FxCop install locations; the first complete install wins."""
    env = os.environ if environ is None else environ

    for var, tool_parts, ruleset_parts in _CANDIDATES:
        root = env.get(var)
        if not root:
            continue

        tool_dir = os.path.join(root, *tool_parts)
        executable = os.path.join(tool_dir, EXECUTABLE_NAME)
        rules_dir = os.path.join(tool_dir, "Rules")
        if os.path.isfile(executable) and os.path.isdir(rules_dir):
            ruleset_dir = os.path.join(root, *ruleset_parts) if ruleset_parts else None
            return ToolLocation.at(executable, rules_dir, ruleset_dir)

    return ToolLocation.not_found()
