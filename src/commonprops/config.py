"""Runtime settings for the commonprops CLI and API defaults.

Precedence: explicit arguments > environment > defaults.

Environment variables:
- COMMONPROPS_POLICY: "strict" or "upcast"
- COMMONPROPS_LOG_LEVEL: a logging level name (DEBUG, INFO, ...)
- COMMONPROPS_FAIL_ON_DROP: truthy string (1/true/yes/on) to exit 2 when fields are dropped
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from commonprops.codes import Policy

ENV_POLICY = "COMMONPROPS_POLICY"
ENV_LOG_LEVEL = "COMMONPROPS_LOG_LEVEL"
ENV_FAIL_ON_DROP = "COMMONPROPS_FAIL_ON_DROP"

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off", ""}


class ConfigError(ValueError):
    """Raised when a setting has an invalid value."""


def _policy(value: Any) -> Policy:
    try:
        return Policy(str(value).strip().lower())
    except ValueError as e:
        raise ConfigError(f"policy must be 'strict' or 'upcast', got {value!r}") from e


def _log_level(value: Any) -> str:
    name = str(value).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigError(f"unknown log level {value!r}")
    return name


def _bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"expected a boolean, got {value!r}")


@dataclass(frozen=True)
class Settings:
    """
    Settings shared by the CLI and the public API.

    Attributes:
        policy: default merge policy when a caller does not pass one.
        log_level: level applied by the CLI to the root logger.
        fail_on_drop: CLI exits with code 2 if any input field was dropped.
    """

    policy: Policy = Policy.UPCAST
    log_level: str = "WARNING"
    fail_on_drop: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        s = cls()
        if env.get(ENV_POLICY):
            s = replace(s, policy=_policy(env[ENV_POLICY]))
        if env.get(ENV_LOG_LEVEL):
            s = replace(s, log_level=_log_level(env[ENV_LOG_LEVEL]))
        if ENV_FAIL_ON_DROP in env:
            s = replace(s, fail_on_drop=_bool(env[ENV_FAIL_ON_DROP]))
        return s

    def override(
        self,
        policy: Optional[Any] = None,
        log_level: Optional[str] = None,
        fail_on_drop: Optional[bool] = None,
    ) -> "Settings":
        """Return a copy with explicitly given values applied (None means unchanged)."""
        s = self
        if policy is not None:
            s = replace(s, policy=_policy(policy.value if isinstance(policy, Policy) else policy))
        if log_level is not None:
            s = replace(s, log_level=_log_level(log_level))
        if fail_on_drop is not None:
            s = replace(s, fail_on_drop=bool(fail_on_drop))
        return s
