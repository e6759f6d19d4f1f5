from .sales_service import SalesService
from .excel_service import ExcelService

__all__ = [
    "SalesService",
    "ExcelService",
]
