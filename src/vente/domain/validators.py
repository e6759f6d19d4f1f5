from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union
from urllib.parse import urlsplit

from vente.domain.formatters import COUNTRY_CODE
from vente.domain.models import (
    FieldRule,
    FormValidationResult,
    PasswordValidationResult,
    ValidationResult,
)
from vente.domain.parsing import digits_only, parse_date, try_parse_amount

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_SPECIAL_CHARS_RE = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")

OK = ValidationResult()


def _is_blank(value: object) -> bool:
    return value is None or value == ""


def validate_email(email: object) -> bool:
    if _is_blank(email) or not isinstance(email, str):
        return False
    return bool(_EMAIL_RE.match(email))


def validate_phone(phone: object) -> bool:
    """Accepts 8 local digits or 11 digits with the country prefix."""
    if _is_blank(phone):
        return False
    cleaned = digits_only(phone)
    return len(cleaned) == 8 or (len(cleaned) == 11 and cleaned.startswith(COUNTRY_CODE))


@dataclass(frozen=True)
class PasswordPolicy:
    min_length: int = 6
    require_uppercase: bool = False
    require_lowercase: bool = False
    require_numbers: bool = False
    require_special_chars: bool = False


def validate_password(
    password: object,
    policy: Optional[PasswordPolicy] = None,
    **overrides: Any,
) -> PasswordValidationResult:
    """
    An empty password only reports that it is required. Otherwise every
    violated rule of the policy is reported, in policy order.
    """
    policy = replace(policy or PasswordPolicy(), **overrides)

    if _is_blank(password):
        return PasswordValidationResult(("Le mot de passe est requis",))
    password = str(password)

    errors: list[str] = []
    if len(password) < policy.min_length:
        errors.append(f"Le mot de passe doit contenir au moins {policy.min_length} caractères")
    if policy.require_uppercase and not re.search(r"[A-Z]", password):
        errors.append("Le mot de passe doit contenir au moins une majuscule")
    if policy.require_lowercase and not re.search(r"[a-z]", password):
        errors.append("Le mot de passe doit contenir au moins une minuscule")
    if policy.require_numbers and not re.search(r"\d", password):
        errors.append("Le mot de passe doit contenir au moins un chiffre")
    if policy.require_special_chars and not _SPECIAL_CHARS_RE.search(password):
        errors.append("Le mot de passe doit contenir au moins un caractère spécial")

    return PasswordValidationResult(tuple(errors))


def validate_password_match(password: object, confirm_password: object) -> bool:
    return password == confirm_password


def validate_required(value: object, field_name: str = "Ce champ") -> ValidationResult:
    if _is_blank(value):
        return ValidationResult(f"{field_name} est requis")
    return OK


def validate_amount(
    amount: object,
    *,
    min: float = 0,
    max: Optional[float] = None,
    required: bool = True,
) -> ValidationResult:
    if _is_blank(amount):
        return ValidationResult("Le montant est requis") if required else OK

    number = try_parse_amount(amount)
    if number is None:
        return ValidationResult("Montant invalide")
    if number < min:
        return ValidationResult(f"Le montant doit être supérieur à {min}")
    if max is not None and number > max:
        return ValidationResult(f"Le montant doit être inférieur à {max}")
    return OK


def validate_date(
    value: object,
    *,
    min: object = None,
    max: object = None,
    required: bool = True,
) -> ValidationResult:
    if _is_blank(value):
        return ValidationResult("La date est requise") if required else OK

    d = parse_date(value)
    if d is None:
        return ValidationResult("Date invalide")

    lower = parse_date(min) if min is not None else None
    upper = parse_date(max) if max is not None else None
    if lower is not None:
        current, bound = _same_frame(d, lower)
        if current < bound:
            return ValidationResult("La date est trop ancienne")
    if upper is not None:
        current, bound = _same_frame(d, upper)
        if current > bound:
            return ValidationResult("La date est trop récente")
    return OK


def _same_frame(a: datetime, b: datetime) -> tuple[datetime, datetime]:
    # mixed naive/aware values compare as naive
    if (a.tzinfo is None) != (b.tzinfo is None):
        return a.replace(tzinfo=None), b.replace(tzinfo=None)
    return a, b


def validate_length(
    value: object,
    *,
    min: Optional[int] = None,
    max: Optional[int] = None,
    exact: Optional[int] = None,
) -> ValidationResult:
    if _is_blank(value):
        return OK
    length = len(str(value))

    if exact is not None and length != exact:
        return ValidationResult(f"Doit contenir exactement {exact} caractères")
    if min is not None and length < min:
        return ValidationResult(f"Doit contenir au moins {min} caractères")
    if max is not None and length > max:
        return ValidationResult(f"Doit contenir au plus {max} caractères")
    return OK


def validate_url(url: object) -> bool:
    if _is_blank(url) or not isinstance(url, str):
        return False
    if any(ch.isspace() for ch in url):
        return False
    candidate = url if url.startswith("http") else f"https://{url}"
    try:
        parts = urlsplit(candidate)
        host = parts.hostname
        port = parts.port  # raises on a malformed port
    except ValueError:
        return False
    return bool(parts.scheme) and bool(host) and (port is None or port > 0)


def validate_number(
    value: object,
    *,
    integer: bool = False,
    min: Optional[float] = None,
    max: Optional[float] = None,
) -> ValidationResult:
    if _is_blank(value):
        return ValidationResult("Valeur requise")

    number = try_parse_amount(value)
    if number is None:
        return ValidationResult("Doit être un nombre")
    if integer and not number.is_integer():
        return ValidationResult("Doit être un nombre entier")
    if min is not None and number < min:
        return ValidationResult(f"Doit être supérieur ou égal à {min}")
    if max is not None and number > max:
        return ValidationResult(f"Doit être inférieur ou égal à {max}")
    return OK


# ---------------- record-level validation ----------------

Check = Callable[[str, FieldRule, Any], Optional[str]]


def _check_required(field: str, rule: FieldRule, value: Any) -> Optional[str]:
    if rule.required:
        return validate_required(value, rule.label or field).error
    return None


def _check_email(field: str, rule: FieldRule, value: Any) -> Optional[str]:
    if rule.email and value and not validate_email(value):
        return "Email invalide"
    return None


def _check_phone(field: str, rule: FieldRule, value: Any) -> Optional[str]:
    if rule.phone and value and not validate_phone(value):
        return "Numéro de téléphone invalide"
    return None


def _check_length(field: str, rule: FieldRule, value: Any) -> Optional[str]:
    if rule.min_length is None and rule.max_length is None:
        return None
    return validate_length(value, min=rule.min_length, max=rule.max_length).error


def _check_custom(field: str, rule: FieldRule, value: Any) -> Optional[str]:
    if rule.custom is not None and value and not rule.custom(value):
        return rule.message or "Valeur invalide"
    return None


# Priority order matters: a field reports only its first failing check.
FIELD_CHECKS: tuple[tuple[str, Check], ...] = (
    ("required", _check_required),
    ("email", _check_email),
    ("phone", _check_phone),
    ("length", _check_length),
    ("custom", _check_custom),
)

Rules = Mapping[str, Union[FieldRule, Mapping[str, Any]]]


def build_rules(rules: Rules) -> dict[str, FieldRule]:
    return {
        name: rule if isinstance(rule, FieldRule) else FieldRule.from_mapping(rule)
        for name, rule in rules.items()
    }


def validate_field(field: str, rule: FieldRule, value: Any) -> Optional[str]:
    for _name, check in FIELD_CHECKS:
        error = check(field, rule, value)
        if error is not None:
            return error
    return None


def validate_form(data: Mapping[str, Any], rules: Rules) -> FormValidationResult:
    errors: dict[str, str] = {}
    for field, rule in build_rules(rules).items():
        error = validate_field(field, rule, data.get(field))
        if error is not None:
            errors[field] = error
    return FormValidationResult(errors)
