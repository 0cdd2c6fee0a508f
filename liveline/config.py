# config.py

import os
from dataclasses import dataclass, fields, replace
from typing import Optional

_TRUE = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class OutputSettings:
    """Tunables for an Output."""

    max_fps: float = 1.0
    coalesce_ms: float = 25
    strict_updates: bool = False
    logging_enabled: bool = False
    log_file: Optional[str] = None

    @property
    def throttle_ms(self) -> int:
        return throttle_period(self.max_fps)

    def with_overrides(self, **overrides) -> "OutputSettings":
        """Return a copy with the non-None overrides applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown output settings: {', '.join(sorted(unknown))}")
        settings = replace(self, **{k: v for k, v in overrides.items() if v is not None})
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.max_fps <= 0:
            raise ValueError(f"max_fps must be positive, got {self.max_fps!r}")
        if self.coalesce_ms < 0:
            raise ValueError(f"coalesce_ms must not be negative, got {self.coalesce_ms!r}")

    @classmethod
    def from_env(cls, environ=None) -> "OutputSettings":
        """
        Build settings from LIVELINE_* environment variables.

        Unparseable or out-of-range numbers fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            max_fps=_positive_float(env.get("LIVELINE_MAX_FPS"), defaults.max_fps),
            coalesce_ms=_positive_float(env.get("LIVELINE_COALESCE_MS"), defaults.coalesce_ms, allow_zero=True),
            strict_updates=env.get("LIVELINE_STRICT", "").strip().lower() in _TRUE,
            logging_enabled=env.get("LIVELINE_LOG", "").strip().lower() in _TRUE,
            log_file=env.get("LIVELINE_LOG_FILE") or None,
        )


def throttle_period(fps: float) -> int:
    """Minimum milliseconds between redraws for a frame rate."""
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps!r}")
    return max(1, int(1000 // fps))


def _positive_float(raw: Optional[str], default: float, allow_zero: bool = False) -> float:
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if value < 0 or (value == 0 and not allow_zero):
        return default
    return value
