from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import sys

from vente.domain.formatters import DEFAULT_CURRENCY
from vente.domain.sales import DEFAULT_TAX_RATE


@dataclass(frozen=True)
class SalesSettings:
    currency: str = DEFAULT_CURRENCY
    tax_rate: float = DEFAULT_TAX_RATE
    default_quantity: str = "1"
    reference_prefix: str = "VTE"


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    logs_dir: Path
    exports_dir: Path


def _windows_appdata() -> Path:
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))


def _mac_app_support() -> Path:
    return Path.home() / "Library" / "Application Support"


def get_app_paths(app_name: str = "VenteForms", base_dir: Path | str | None = None) -> AppPaths:
    if base_dir is not None:
        base = Path(base_dir)
    elif sys.platform.startswith("win"):
        base = _windows_appdata() / app_name
    elif sys.platform == "darwin":
        base = _mac_app_support() / app_name
    else:
        base = Path.home() / f".{app_name.lower()}"

    logs = base / "logs"
    exports = base / "exports"

    base.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)
    exports.mkdir(parents=True, exist_ok=True)

    return AppPaths(base_dir=base, logs_dir=logs, exports_dir=exports)
