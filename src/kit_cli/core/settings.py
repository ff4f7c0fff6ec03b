"""Process settings threaded explicitly through the dispatcher.

The run mode is never written to the process environment.  Commands
call :meth:`Settings.with_default_mode` to merge their default, which
only applies when no mode was configured.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field

MODE_ENV = "KIT_ENV"
LOG_LEVEL_ENV = "LOG_LEVEL"
SUBSYSTEM_ENV_PREFIX = "KIT_SUBSYSTEM_"


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable settings for one CLI run."""

    mode: str | None = None
    """``"development"``, ``"production"``, or whatever the operator set."""

    log_level: str | None = None

    subsystems: Mapping[str, str] = field(default_factory=dict)
    """Per-subsystem ``module:attribute`` overrides, keyed by lower-case name."""

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> Settings:
        """Read settings from an environment mapping such as ``os.environ``."""
        overrides = {
            key[len(SUBSYSTEM_ENV_PREFIX):].lower(): value
            for key, value in environ.items()
            if key.startswith(SUBSYSTEM_ENV_PREFIX) and value
        }
        return cls(
            mode=environ.get(MODE_ENV) or None,
            log_level=environ.get(LOG_LEVEL_ENV) or None,
            subsystems=overrides,
        )

    def with_default_mode(self, mode: str) -> Settings:
        """Return settings whose mode is *mode* unless one is already set."""
        if self.mode:
            return self
        return dataclasses.replace(self, mode=mode)
