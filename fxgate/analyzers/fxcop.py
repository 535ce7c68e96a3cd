from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fxgate.core.util import run_cmd
from fxgate.domain.errors import ExecutionError, LaunchError
from fxgate.domain.models import RunConfiguration
from fxgate.normalizers.util import get_rel_path

from .base import Invocation, StaticCodeAnalyzer

logger = logging.getLogger(__name__)

# quiet, ignore invalid targets, force output, ignore generated code, search GAC
FIXED_FLAGS = ("/q", "/iit", "/fo", "/igc", "/gac")

_TRAILING_SEP = re.compile(r"[\\/]$")


class FxCopAnalyzer(StaticCodeAnalyzer):
    def tool_name(self) -> str:
        return "fxcop"

    def build_args(self, config: RunConfiguration, report_path: str | Path) -> list[str]:
        args = [*FIXED_FLAGS, f"/o:{_full_path(report_path)}"]
        args += [f"/f:{_full_path(a)}" for a in config.assemblies]

        if config.uses_ruleset:
            args.append(f"/rs:={config.ruleset}")
            args.append(f"/rsd:{_TRAILING_SEP.sub('', _full_path(config.ruleset_dir))}")
        else:
            args += [f"/r:{_full_path(r)}" for r in config.rules]

        if config.dictionary:
            args.append(f"/dic:{_full_path(config.dictionary)}")

        return args

    @contextmanager
    def invoke(self, config: RunConfiguration) -> Iterator[Invocation]:
        """Run FxCop and yield the finished invocation.

        The report file stays on disk for the body of the ``with`` block.
        A scratch report (no ``output_path`` configured) is removed on the
        way out whatever happened inside; an explicit one is kept.
        """
        report, scratch = _report_target(config)
        try:
            yield self._execute(config, report, scratch)
        finally:
            if scratch:
                report.unlink(missing_ok=True)
                logger.debug("Removed scratch report %s", report)

    def _execute(self, config: RunConfiguration, report: Path, scratch: bool) -> Invocation:
        exe = shutil.which(config.executable or "") or _full_path(config.executable or "")
        args = self.build_args(config, report)

        logger.info("FxCop location: '%s'.", exe)
        for assembly in config.assemblies:
            logger.info("Running FxCop on '%s'.", get_rel_path(_full_path(assembly)))
        logger.debug("FxCop arguments: '%s'", subprocess.list2cmdline(args))

        try:
            r = run_cmd([exe, *args], timeout_sec=config.timeout_sec)
        except subprocess.TimeoutExpired as e:
            # subprocess.run has already killed the child
            raise ExecutionError(
                f"FxCop did not exit within {config.timeout_sec} seconds and was killed.",
                exit_code=None,
                stdout=_text(e.stdout),
                stderr=_text(e.stderr),
            ) from e
        except OSError as e:
            raise LaunchError(f"Failed to start the FxCop process at '{exe}': {e}") from e

        if r.exit_code != 0:
            raise ExecutionError(
                f"FxCop exited with code {r.exit_code}.",
                exit_code=r.exit_code,
                stdout=r.stdout,
                stderr=r.stderr,
            )

        return Invocation(
            tool=self.tool_name(),
            exit_code=r.exit_code,
            report_path=report,
            stdout=r.stdout,
            stderr=r.stderr,
            scratch=scratch,
        )


def _report_target(config: RunConfiguration) -> tuple[Path, bool]:
    if not config.output_path:
        fd, name = tempfile.mkstemp(prefix="fxcop-", suffix=".xml")
        os.close(fd)
        return Path(name), True

    report = Path(_full_path(config.output_path))
    try:
        report.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LaunchError(f"Cannot create the report directory '{report.parent}': {e}") from e
    return report, False


def _full_path(path: str | Path | None) -> str:
    return os.path.abspath(os.fspath(path or ""))


def _text(data: str | bytes | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
