import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

@dataclass
class CmdResult:
    exit_code: int
    stdout: str
    stderr: str

def run_cmd(cmd: Sequence[str], cwd: Path | None = None, timeout_sec: float | None = None) -> CmdResult:
    # communicate() drains stdout and stderr together while waiting
    p = subprocess.run(
        list(cmd),
        cwd=str(cwd) if cwd else None,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        errors="replace",
        timeout=timeout_sec
    )
    return CmdResult(p.returncode, p.stdout or "", p.stderr or "")
