"""Engine settings resolved from keyword arguments or the environment."""

from __future__ import annotations

from dataclasses import dataclass

from .telemetry import DEFAULT_LOGGER_NAME, env, env_flag


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Knobs shared by the cursor and style engines.

    ``reject_overlapping_selections`` switches cursor sets into strict mode,
    where a new cursor or selection overlapping an existing one is ignored the
    same way a duplicate is.
    """

    reject_overlapping_selections: bool = False
    logger_name: str = DEFAULT_LOGGER_NAME

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            reject_overlapping_selections=env_flag("REJECT_OVERLAPS", False),
            logger_name=env("LOGGER") or DEFAULT_LOGGER_NAME,
        )


__all__ = ["EngineConfig"]
