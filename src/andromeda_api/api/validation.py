"""Pure input checks applied before any request is built."""

from __future__ import annotations

from typing import Any

import httpx

from .errors import ValidationError
from .models import ROLES, Credentials

CHECK_INTERVAL_MIN = 30
CHECK_INTERVAL_MAX = 180
PHONE_PREFIX = "+7"
PHONE_LENGTH = 12


def require_value(value: Any, field: str, label: str) -> None:
    """Reject empty identifiers; integer identifiers must be natural numbers."""

    if isinstance(value, bool):
        raise ValidationError(field, f"Invalid {label}: expected an identifier, got a boolean.")
    if isinstance(value, int):
        if value < 1:
            raise ValidationError(field, f"Invalid {label}: numeric identifiers must be >= 1, got {value}.")
        return
    if value is None or not str(value).strip():
        raise ValidationError(field, f"Invalid {label}: value is required.")


def validate_host(host: str) -> httpx.URL:
    if not host or not host.strip():
        raise ValidationError("host", "Invalid server address: host is required.")
    try:
        url = httpx.URL(host.strip())
    except httpx.InvalidURL as exc:
        raise ValidationError("host", f"Invalid server address {host!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ValidationError("host", f"Invalid server address {host!r}: expected an absolute http(s) URL.")
    if "?" in host or "#" in host:
        raise ValidationError("host", f"Invalid server address {host!r}: query strings and fragments are not allowed.")
    return url


def validate_credentials(credentials: Credentials) -> None:
    if not isinstance(credentials, Credentials):
        raise ValidationError("credentials", "Invalid credentials: expected a Credentials instance.")
    if not credentials.api_key or not credentials.api_key.strip():
        raise ValidationError("api_key", "Invalid API key: value is required.")
    validate_host(credentials.host)


def validate_check_interval(value: int) -> None:
    # 0 selects the provider default; explicit values are exclusive of both bounds.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("check_interval", f"Invalid check interval: expected seconds as an integer, got {value!r}.")
    if value == 0:
        return
    if not CHECK_INTERVAL_MIN < value < CHECK_INTERVAL_MAX:
        raise ValidationError(
            "check_interval",
            f"Invalid check interval: {value} is outside ({CHECK_INTERVAL_MIN}, {CHECK_INTERVAL_MAX}) seconds.",
        )


def validate_role(value: str) -> None:
    if value not in ROLES:
        allowed = ", ".join(sorted(ROLES))
        raise ValidationError("role", f"Invalid user role {value!r}: expected one of {allowed}.")


def validate_phone(value: str) -> None:
    if not isinstance(value, str) or len(value) != PHONE_LENGTH or not value.startswith(PHONE_PREFIX):
        raise ValidationError("phone", f"Invalid phone number {value!r}: expected {PHONE_LENGTH} characters starting with {PHONE_PREFIX}.")


def validate_flag(value: Any, field: str) -> None:
    if not isinstance(value, bool):
        raise ValidationError(field, f"Invalid {field}: expected a boolean, got {value!r}.")
