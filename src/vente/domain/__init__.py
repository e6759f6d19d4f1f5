from .models import (
    FieldRule,
    FormValidationResult,
    LineItem,
    PasswordValidationResult,
    PaymentMethod,
    SalesRecord,
    SalesTotals,
    SaleStatus,
    ValidationResult,
)
from .errors import AppError, ValidationError, ExportError

__all__ = [
    "FieldRule",
    "FormValidationResult",
    "LineItem",
    "PasswordValidationResult",
    "PaymentMethod",
    "SalesRecord",
    "SalesTotals",
    "SaleStatus",
    "ValidationResult",
    "AppError",
    "ValidationError",
    "ExportError",
]
