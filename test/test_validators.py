from datetime import date, datetime

import pytest

from vente.domain.validators import (
    PasswordPolicy,
    validate_amount,
    validate_date,
    validate_email,
    validate_length,
    validate_number,
    validate_password,
    validate_password_match,
    validate_phone,
    validate_required,
    validate_url,
)


@pytest.mark.parametrize(
    "email, expected",
    [
        ("a@b.co", True),
        ("jean.dupont@entreprise.tg", True),
        ("a@b", False),
        ("", False),
        (None, False),
        ("a b@c.com", False),
        ("a@@b.com", False),
    ],
)
def test_validate_email(email, expected):
    assert validate_email(email) is expected


@pytest.mark.parametrize(
    "phone, expected",
    [
        ("90123456", True),
        ("90 12 34 56", True),
        ("22890123456", True),
        ("+228 90 12 34 56", True),
        ("33612345678", False),
        ("123", False),
        ("", False),
    ],
)
def test_validate_phone(phone, expected):
    assert validate_phone(phone) is expected


def test_validate_password_reports_only_min_length_for_short_password():
    result = validate_password("abc", min_length=6)

    assert not result.is_valid
    assert result.errors == ("Le mot de passe doit contenir au moins 6 caractères",)


def test_validate_password_empty_short_circuits():
    result = validate_password("", PasswordPolicy(require_uppercase=True, require_numbers=True))

    assert not result.is_valid
    assert result.errors == ("Le mot de passe est requis",)


def test_validate_password_accumulates_every_violation():
    policy = PasswordPolicy(
        min_length=8,
        require_uppercase=True,
        require_lowercase=True,
        require_numbers=True,
        require_special_chars=True,
    )
    result = validate_password("abc", policy)

    assert not result.is_valid
    assert len(result.errors) == 4
    assert "majuscule" in result.errors[1]
    assert all("minuscule" not in e for e in result.errors)

    assert validate_password("Abcdef1!", policy).is_valid


def test_validate_password_match():
    assert validate_password_match("secret", "secret")
    assert not validate_password_match("secret", "Secret")


def test_validate_required():
    assert validate_required("x").is_valid
    assert validate_required(0).is_valid
    result = validate_required("", "Le client")
    assert not result.is_valid
    assert result.error == "Le client est requis"
    assert validate_required(None).error == "Ce champ est requis"


def test_validate_amount_priority_order():
    assert validate_amount("").error == "Le montant est requis"
    assert validate_amount(None, required=False).is_valid
    assert validate_amount("abc").error == "Montant invalide"
    assert validate_amount(-5).error == "Le montant doit être supérieur à 0"
    assert validate_amount("150 000 FCFA", max=100000).error == "Le montant doit être inférieur à 100000"
    assert validate_amount("12 000 FCFA").is_valid
    assert validate_amount(0).is_valid


def test_validate_number():
    assert validate_number("").error == "Valeur requise"
    assert validate_number("douze").error == "Doit être un nombre"
    assert validate_number("2.5", integer=True).error == "Doit être un nombre entier"
    assert validate_number(3, min=5).error == "Doit être supérieur ou égal à 5"
    assert validate_number(30, max=10).error == "Doit être inférieur ou égal à 10"
    assert validate_number(0).is_valid
    assert validate_number("7", integer=True, min=1, max=10).is_valid


def test_validate_date():
    assert validate_date("").error == "La date est requise"
    assert validate_date(None, required=False).is_valid
    assert validate_date("demain").error == "Date invalide"
    assert validate_date("2020-01-01", min="2021-01-01").error == "La date est trop ancienne"
    assert validate_date(date(2030, 1, 1), max=date(2029, 12, 31)).error == "La date est trop récente"
    assert validate_date("15/06/2025", min="2025-01-01", max=datetime(2025, 12, 31)).is_valid


def test_validate_length_priority_order():
    assert validate_length("").is_valid
    assert validate_length("abc", exact=4).error == "Doit contenir exactement 4 caractères"
    assert validate_length("ab", min=3, max=1).error == "Doit contenir au moins 3 caractères"
    assert validate_length("abcdef", max=5).error == "Doit contenir au plus 5 caractères"
    assert validate_length("abcd", min=2, max=5).is_valid


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://example.com", True),
        ("example.com/path", True),
        ("http://localhost:8069", True),
        ("", False),
        (None, False),
        ("exa mple.com", False),
        ("https://", False),
        ("http://host:notaport", False),
    ],
)
def test_validate_url(url, expected):
    assert validate_url(url) is expected


def test_validators_never_raise_on_odd_input():
    for value in (None, "", [], {}, object(), float("nan")):
        validate_email(value)
        validate_phone(value)
        validate_amount(value)
        validate_number(value)
        validate_date(value)
        validate_url(value)
        validate_password(value)
