import ntpath
import os
import posixpath
import re

_DRIVE = re.compile(r"^[A-Za-z]:")
_SEPARATORS = ("\\", "/")


def get_rel_path(path: str, cwd: str | None = None) -> str:
    """
    Strip the current working directory from a tool-reported path.

    The comparison is case-insensitive and accepts either separator after
    the directory prefix, so Windows-style report paths relativize the same
    way on every host. Paths outside the directory come back unchanged.
    Used for display only.
    """
    if not path:
        raise ValueError("path must contain a value.")

    base = (os.getcwd() if cwd is None else cwd).rstrip("\\/")
    prefix = path[: len(base)]
    if prefix.upper() == base.upper() and path[len(base) : len(base) + 1] in _SEPARATORS:
        return path[len(base) + 1 :]
    return path


def join_report_path(directory: str, file: str) -> str:
    """Join a report's Path and File attributes using the report's own separator style."""
    if "\\" in directory or _DRIVE.match(directory):
        return ntpath.join(directory, file)
    return posixpath.join(directory, file)


def file_name(path: str) -> str:
    """Filename portion of a path written with either separator."""
    return re.split(r"[\\/]", path)[-1]
