import math
import re

from storemanager.db import fits_integer
from storemanager.errors import ValidationError

ROLES = ("Owner", "Admin", "Attendant")

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _text(body, field, errors, label, required=True):
    value = body.get(field)
    if value is None:
        if required:
            errors.append(f"{label} is required.")
        return None
    if not isinstance(value, str) or not value.strip():
        errors.append(f"{label} must be a non-empty string.")
        return None
    return value.strip()


def _number(body, field, errors, label, cast, required=True):
    value = body.get(field)
    if value is None:
        if required:
            errors.append(f"{label} is required.")
        return None
    # bool is an int subclass
    if isinstance(value, bool):
        errors.append(f"{label} must be a number.")
        return None
    try:
        number = float(value) if cast is float else _whole(value)
    except (TypeError, ValueError, OverflowError):
        errors.append(f"{label} must be a {'number' if cast is float else 'whole number'}.")
        return None
    if cast is float and not math.isfinite(number):
        errors.append(f"{label} must be a finite number.")
        return None
    if cast is int and not fits_integer(number):
        errors.append(f"{label} is too large.")
        return None
    if number < 0:
        errors.append(f"{label} cannot be negative.")
        return None
    return number


def _whole(value):
    """int() that refuses to drop a fractional part."""
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(value)
        return int(value)
    return int(value)


def validate_product(body, partial=False):
    """Clean a product body; with ``partial`` only the fields given are checked."""
    errors = []
    required = not partial
    cleaned = {
        "name": _text(body, "name", errors, "Product name", required),
        "categoryid": _number(body, "categoryid", errors, "Category id", int, required),
        "price": _number(body, "price", errors, "Price", float, required),
        "quantity": _number(body, "quantity", errors, "Quantity", int, required),
    }
    description = body.get("description")
    if description is not None and not isinstance(description, str):
        errors.append("Description must be a string.")
    elif description is not None or not partial:
        cleaned["description"] = description
    if errors:
        raise ValidationError(errors)
    return {key: value for key, value in cleaned.items() if value is not None or key == "description"}


def validate_category(body):
    errors = []
    name = _text(body, "name", errors, "Category name")
    if errors:
        raise ValidationError(errors)
    return {"name": name}


def validate_user(body, partial=False):
    errors = []
    required = not partial
    cleaned = {
        "name": _text(body, "name", errors, "Name", required),
        "email": _text(body, "email", errors, "Email", required),
        "password": _text(body, "password", errors, "Password", required),
        "role": _text(body, "role", errors, "Role", False),
    }
    if cleaned["email"] and not EMAIL_RE.match(cleaned["email"]):
        errors.append("Email must be a valid email address.")
    if cleaned["password"] and len(cleaned["password"]) < 5:
        errors.append("Password must be at least 5 characters long.")
    if cleaned["role"] and cleaned["role"] not in ROLES:
        errors.append(f"Role must be one of {', '.join(ROLES)}.")
    if errors:
        raise ValidationError(errors)
    if cleaned["email"]:
        cleaned["email"] = cleaned["email"].lower()
    return {key: value for key, value in cleaned.items() if value is not None}


def validate_login(body):
    errors = []
    email = _text(body, "email", errors, "Email")
    password = _text(body, "password", errors, "Password")
    if errors:
        raise ValidationError(errors)
    return email.lower(), password
