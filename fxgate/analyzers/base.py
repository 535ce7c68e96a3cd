from __future__ import annotations
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path

from fxgate.domain.models import RunConfiguration

@dataclass
class Invocation:
    tool: str
    exit_code: int
    report_path: Path
    stdout: str
    stderr: str
    scratch: bool = False

class StaticCodeAnalyzer(ABC):
    @abstractmethod
    def tool_name(self) -> str: ...

    @abstractmethod
    def invoke(self, config: RunConfiguration) -> AbstractContextManager[Invocation]: ...
