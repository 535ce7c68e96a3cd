from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path

from fxgate.domain.models import Diagnostic

class ReportParser(ABC):
    @abstractmethod
    def tool_name(self) -> str: ...

    @abstractmethod
    def parse(self, report_path: str | Path) -> list[Diagnostic]: ...
