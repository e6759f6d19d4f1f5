from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from vente.domain.formatters import format_currency


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "Virement bancaire"
    CASH = "Espèces"
    CHECK = "Chèque"
    MOBILE_MONEY = "Mobile Money"
    CARD = "Carte bancaire"


class SaleStatus(str, Enum):
    PENDING = "En attente"
    PAID = "Payée"
    OVERDUE = "En retard"
    CANCELLED = "Annulée"


@dataclass(frozen=True)
class ValidationResult:
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FormValidationResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class PasswordValidationResult:
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


_RULE_ALIASES = {"minLength": "min_length", "maxLength": "max_length"}


@dataclass(frozen=True)
class FieldRule:
    required: bool = False
    email: bool = False
    phone: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    custom: Optional[Callable[[Any], Any]] = None
    label: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FieldRule":
        known = set(cls.__dataclass_fields__)
        kwargs = {}
        for key, value in data.items():
            name = _RULE_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown validation rule: {key}")
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class LineItem:
    name: str = ""
    quantity: str = "1"
    unit_price: str = ""
    line_total: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LineItem":
        return cls(
            name=str(data.get("name") or ""),
            quantity=str(data.get("quantity") if data.get("quantity") is not None else "1"),
            unit_price=str(data.get("unit_price") or ""),
            line_total=str(data.get("line_total") or ""),
        )


@dataclass(frozen=True)
class SalesRecord:
    client: str = ""
    date: str = ""
    due_date: str = ""
    reference: str = ""
    payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    status: SaleStatus = SaleStatus.PENDING
    notes: str = ""
    lines: tuple[LineItem, ...] = (LineItem(),)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SalesRecord":
        """Build a record from the plain object a screen passes around."""
        lines = tuple(
            ln if isinstance(ln, LineItem) else LineItem.from_mapping(ln)
            for ln in (data.get("lines") or ())
        )
        return cls(
            client=str(data.get("client") or ""),
            date=str(data.get("date") or ""),
            due_date=str(data.get("due_date") or ""),
            reference=str(data.get("reference") or ""),
            payment_method=PaymentMethod(data.get("payment_method") or PaymentMethod.BANK_TRANSFER),
            status=SaleStatus(data.get("status") or SaleStatus.PENDING),
            notes=str(data.get("notes") or ""),
            lines=lines or (LineItem(),),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "client": self.client,
            "date": self.date,
            "due_date": self.due_date,
            "reference": self.reference,
            "payment_method": self.payment_method.value,
            "status": self.status.value,
            "notes": self.notes,
            "lines": [
                {
                    "name": ln.name,
                    "quantity": ln.quantity,
                    "unit_price": ln.unit_price,
                    "line_total": ln.line_total,
                }
                for ln in self.lines
            ],
        }


@dataclass(frozen=True)
class SalesTotals:
    subtotal: float
    tax: float
    total: float
    tax_rate: float

    @property
    def subtotal_display(self) -> str:
        return format_currency(self.subtotal, show_currency=False)

    @property
    def tax_display(self) -> str:
        return format_currency(self.tax, show_currency=False)

    @property
    def total_display(self) -> str:
        return format_currency(self.total, show_currency=False)
