"""Config file loading for fintrack."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any

from fintrack.forex import ForexConfig
from fintrack.models import DEFAULT_DISPLAY_CURRENCY, normalize_currency

CONFIG_ENV_VAR = "FINTRACK_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".fintrack" / "config.json"
DEFAULT_DATA_NAME = "records.json"


def resolve_config_path(config_path: str | Path | None = None) -> Path:
    """Resolve the config path from an argument, the environment, or the default."""
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Load config file if present, else return empty config."""
    path = Path(config_path)
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        return {}
    return payload


def save_config(config_path: str | Path, payload: dict[str, Any]) -> None:
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


@dataclass(frozen=True)
class FintrackConfig:
    """Resolved application settings."""

    path: Path
    display_currency: str = DEFAULT_DISPLAY_CURRENCY
    data_path: Path = Path(DEFAULT_DATA_NAME)
    forex: ForexConfig = field(default_factory=ForexConfig)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "FintrackConfig":
        path = resolve_config_path(config_path)
        payload = load_config(path)
        data_path = Path(payload.get("data_path") or path.parent / DEFAULT_DATA_NAME)
        return cls(
            path=path,
            display_currency=normalize_currency(
                payload.get("display_currency", DEFAULT_DISPLAY_CURRENCY)
            ),
            data_path=data_path,
            forex=ForexConfig.from_dict(payload.get("forex")),
        )

    def with_display_currency(self, currency: str) -> "FintrackConfig":
        """Persist a new display currency and return the updated config."""
        payload = load_config(self.path)
        payload["display_currency"] = normalize_currency(currency)
        save_config(self.path, payload)
        return FintrackConfig(
            path=self.path,
            display_currency=payload["display_currency"],
            data_path=self.data_path,
            forex=self.forex,
        )
