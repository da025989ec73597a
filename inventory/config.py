import os
from dataclasses import dataclass

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    # list() raises EmptyStoreError on an empty store when set
    strict_empty: bool = True


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in _FALSE_VALUES


def load_settings() -> Settings:
    return Settings(
        log_level=os.getenv("INVENTORY_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
        strict_empty=_env_flag("INVENTORY_STRICT_EMPTY", "1"),
    )
