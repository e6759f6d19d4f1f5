from __future__ import annotations

from typing import Any, Mapping, Optional

from vente.domain.models import FieldRule, FormValidationResult
from vente.domain.validators import (
    PasswordPolicy,
    validate_form,
    validate_password,
    validate_password_match,
    validate_required,
)

CONTACT_RULES: dict[str, FieldRule] = {
    "name": FieldRule(required=True, label="Le nom", max_length=120),
    "email": FieldRule(email=True),
    "phone": FieldRule(phone=True),
    "mobile": FieldRule(phone=True),
}

CONTACT_CHANNELS = ("email", "phone", "mobile")


def validate_contact(data: Mapping[str, Any]) -> FormValidationResult:
    """Field rules plus: a contact needs at least one way to reach it."""
    errors = dict(validate_form(data, CONTACT_RULES).errors)
    if not any(str(data.get(key) or "").strip() for key in CONTACT_CHANNELS):
        errors["contact"] = "Veuillez fournir au moins un email, un téléphone ou un mobile"
    return FormValidationResult(errors)


def validate_password_change(
    current_password: str,
    new_password: str,
    confirm_password: str,
    policy: Optional[PasswordPolicy] = None,
) -> FormValidationResult:
    errors: dict[str, str] = {}

    current = validate_required(current_password, "Le mot de passe actuel")
    if not current.is_valid:
        errors["current_password"] = current.error

    strength = validate_password(new_password, policy)
    if not strength.is_valid:
        errors["new_password"] = strength.errors[0]
    elif current.is_valid and new_password == current_password:
        errors["new_password"] = "Le nouveau mot de passe doit être différent de l'actuel"

    if not validate_password_match(new_password, confirm_password):
        errors["confirm_password"] = "Les mots de passe ne correspondent pas"

    return FormValidationResult(errors)
