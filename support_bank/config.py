# support_bank/config.py
from __future__ import annotations

import copy
from pathlib import Path
from typing import Dict

import yaml

from support_bank.core.errors import ConfigError

DEFAULT_CONFIG: Dict[str, object] = {
    "sources": [
        "Transactions2014.csv",
        "DodgyTransactions2015.csv",
    ],
    "delimiter": ",",
    "date_formats": ["%d/%m/%Y", "%Y-%m-%d"],
    "display_date_format": "%d/%m/%Y",
    "currency_symbol": "£",
    "allow_negative_amounts": True,
    "source_loaders": {
        "default": "support_bank.loaders.csv_loader.CsvLoader",
        "csv": "support_bank.loaders.csv_loader.CsvLoader",
    },
    "logging": {
        "level": "WARNING",
        "file": None,
    },
}


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def _validate(config: Dict[str, object], source: str) -> None:
    delimiter = config["delimiter"]
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ConfigError(f"'delimiter' must be a single character in {source}")
    for key in ("sources", "date_formats"):
        value = config[key]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"'{key}' must be a list of strings in {source}")
    if not config["date_formats"]:
        raise ConfigError(f"'date_formats' must not be empty in {source}")
    if not isinstance(config["logging"], dict):
        raise ConfigError(f"'logging' must be a mapping in {source}")
    if not isinstance(config["source_loaders"], dict) or "default" not in config["source_loaders"]:
        raise ConfigError(f"'source_loaders' must map file types to loader classes in {source}")


def load_config(path: str | Path | None = None) -> Dict[str, object]:
    """
    Read a YAML config file and fill in defaults for anything it leaves out.
    With no path, return a copy of the defaults.
    """
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    config = _merge_defaults(data, DEFAULT_CONFIG)
    _validate(config, str(path))
    return config
