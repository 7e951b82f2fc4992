"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import json
from pathlib import Path
import sys

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src" / "python"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    """Config file pointing at a records file inside the temp directory."""
    path = tmp_path / "config.json"
    payload = {
        "display_currency": "RUB",
        "data_path": str(tmp_path / "records.json"),
        "forex": {"api_url": "https://rates.example.test/latest", "timeout": 1},
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture()
def rub_rates() -> dict[str, float]:
    """Rates based on RUB: units of each currency per one rouble."""
    return {"RUB": 1.0, "USD": 0.011, "EUR": 0.01}


@pytest.fixture()
def usd_rates() -> dict[str, float]:
    return {"USD": 1.0, "RUB": 90.0, "EUR": 0.92}
