"""Store configuration, optionally read from `[tool.nonexhaustive]` in pyproject.toml."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import msgspec

from .logger import level_from_name

CONFIG_TABLE = "nonexhaustive"


class StoreConfig(msgspec.Struct, frozen=True, kw_only=True, forbid_unknown_fields=True):
    receive_timeout: float = 1.0
    """Seconds `receive` waits for running effects to produce the expected action."""

    effect_cancel_timeout: float = 1.0
    """Grace period given to each in-flight effect when it is cancelled."""

    unexpected_strict_success: Literal["log", "fail"] = "log"
    """What to do when a relaxed call turns out to pass strictly."""

    log_level: str = "INFO"
    audit_log_path: str | None = None

    def __post_init__(self) -> None:
        if self.receive_timeout < 0:
            raise ValueError(f"receive_timeout must be >= 0, got {self.receive_timeout}.")
        if self.effect_cancel_timeout <= 0:
            raise ValueError(
                f"effect_cancel_timeout must be > 0, got {self.effect_cancel_timeout}."
            )
        level_from_name(self.log_level)

    @property
    def level(self) -> int:
        return level_from_name(self.log_level)


def config_from_mapping(data: dict[str, Any]) -> StoreConfig:
    try:
        return msgspec.convert(data, StoreConfig)
    except msgspec.ValidationError as e:
        raise ValueError(f"invalid [tool.{CONFIG_TABLE}] configuration: {e}") from e


def load_config(path: str | Path | None = None) -> StoreConfig:
    """Load config from a pyproject.toml.

    Missing file or missing table yields the defaults.
    """
    p = Path(path) if path is not None else Path.cwd() / "pyproject.toml"
    if not p.is_file():
        return StoreConfig()
    try:
        document = msgspec.toml.decode(p.read_bytes())
    except msgspec.DecodeError as e:
        raise ValueError(f"{p}: not valid TOML ({e})") from e
    table = document.get("tool", {}).get(CONFIG_TABLE)
    if table is None:
        return StoreConfig()
    return config_from_mapping(table)
