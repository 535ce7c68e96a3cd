import os

from pydantic import BaseModel


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


class Settings(BaseModel):
    APP_VERSION: str = os.getenv("APP_VERSION", "0.3.0")

    # FxCop: tool location (falls back to install discovery when unset)
    FXCOP_EXECUTABLE: str | None = os.getenv("FXCOP_EXECUTABLE")
    FXCOP_RULESET: str = os.getenv("FXCOP_RULESET", "AllRules.ruleset")
    FXCOP_RULESET_DIR: str | None = os.getenv("FXCOP_RULESET_DIR")

    # HTTP API: keep each run's report here; scratch files when unset
    FXCOP_REPORT_DIR: str | None = os.getenv("FXCOP_REPORT_DIR")

    # FxCop: gate policy
    FXCOP_FAIL_ON_ERROR: bool = _env_flag("FXCOP_FAIL_ON_ERROR", True)
    FXCOP_FAIL_ON_WARNING: bool = _env_flag("FXCOP_FAIL_ON_WARNING", False)

    # None means wait for the tool as long as it takes
    FXCOP_TIMEOUT_SEC: float | None = _env_float("FXCOP_TIMEOUT_SEC")


settings = Settings()
