from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from vente.config import AppPaths, SalesSettings
from vente.domain.models import SalesRecord
from vente.services.excel_service import ExcelService
from vente.services.sales_service import SalesService


@dataclass(frozen=True)
class AppContainer:
    settings: SalesSettings
    sales: SalesService
    excel: ExcelService


def build_container(
    settings: SalesSettings | None = None,
    sink: Callable[[SalesRecord], Any] | None = None,
    paths: AppPaths | None = None,
) -> AppContainer:
    settings = settings or SalesSettings()

    sales = SalesService(settings, sink=sink)
    excel = ExcelService(settings, exports_dir=paths.exports_dir if paths else None)

    return AppContainer(
        settings=settings,
        sales=sales,
        excel=excel,
    )
