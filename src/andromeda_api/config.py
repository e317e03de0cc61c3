"""
Settings loader for Andromeda credentials.

Values are read from the ``[andromeda]`` table of a TOML secrets file. The
lookup order is:

1. Explicit ``ANDROMEDA_SECRETS_PATH`` environment variable.
2. Project-relative ``.secrets/secret.toml`` (both from CWD and the project root).
3. Project-relative ``.secrets/secrets.toml``.
4. Fallback to ``.secrets/secrets.example.toml`` for scaffolding values.

Environment variables (``ANDROMEDA_HOST``, ``ANDROMEDA_API_KEY``,
``ANDROMEDA_USER_NAME``, ``ANDROMEDA_TIMEOUT``, ``ANDROMEDA_SITE_ID``) take
precedence over file values. Call :func:`load_settings` to obtain an
:class:`AndromedaSettings` instance.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from .api.models import Credentials

DEFAULT_TIMEOUT = 5.0
SECTION = "andromeda"

_ENV_OVERRIDES = {
    "host": "ANDROMEDA_HOST",
    "api_key": "ANDROMEDA_API_KEY",
    "user_name": "ANDROMEDA_USER_NAME",
    "timeout": "ANDROMEDA_TIMEOUT",
    "site_id": "ANDROMEDA_SITE_ID",
}


@dataclass(slots=True, frozen=True)
class AndromedaSettings:
    """Connection settings for the Andromeda API."""

    host: Optional[str] = None
    api_key: Optional[str] = None
    user_name: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    site_id: Optional[str] = None
    source_path: Optional[Path] = None

    def credentials(self) -> Credentials:
        """Credentials for request inputs; blanks are left to input validation."""
        return Credentials(api_key=self.api_key or "", host=self.host or "")

    def with_overrides(self, **values: object) -> "AndromedaSettings":
        """Return a copy with every non-``None`` keyword applied."""
        changes = {key: value for key, value in values.items() if value is not None}
        return replace(self, **changes) if changes else self


def _discover_project_root() -> Optional[Path]:
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").is_file():
            return parent
    return None


def _candidate_paths() -> Iterable[Path]:
    env_override = os.getenv("ANDROMEDA_SECRETS_PATH")
    if env_override:
        yield Path(env_override).expanduser()

    search_roots = [Path.cwd()]
    project_root = _discover_project_root()
    if project_root and project_root not in search_roots:
        search_roots.append(project_root)

    for base in search_roots:
        secrets_dir = base / ".secrets"
        for filename in ("secret.toml", "secrets.toml", "secrets.example.toml"):
            yield secrets_dir / filename


def _load_toml(path: Path) -> Dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _coerce_timeout(value: object) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        timeout = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid Andromeda timeout {value!r}; expected a number of seconds.") from exc
    if timeout <= 0:
        raise ValueError(f"Invalid Andromeda timeout {value!r}; expected a positive number of seconds.")
    return timeout


def _extract_settings(raw: Mapping[str, object], source_path: Optional[Path]) -> AndromedaSettings:
    section = raw.get(SECTION, {}) if isinstance(raw, Mapping) else {}
    if not isinstance(section, Mapping):
        section = {}

    def _extract(key: str) -> Optional[str]:
        value = section.get(key)
        if isinstance(value, (str, int)) and not isinstance(value, bool) and str(value):
            return str(value)
        return None

    return AndromedaSettings(
        host=_extract("host"),
        api_key=_extract("api_key"),
        user_name=_extract("user_name"),
        timeout=_coerce_timeout(section.get("timeout")) or DEFAULT_TIMEOUT,
        site_id=_extract("site_id"),
        source_path=source_path,
    )


def _apply_environment(settings: AndromedaSettings) -> AndromedaSettings:
    overrides: Dict[str, object] = {}
    for attribute, variable in _ENV_OVERRIDES.items():
        value = os.getenv(variable)
        if not value:
            continue
        overrides[attribute] = _coerce_timeout(value) if attribute == "timeout" else value
    return settings.with_overrides(**overrides)


def load_settings(strict: bool = False) -> AndromedaSettings:
    """
    Load Andromeda settings from the configured locations.

    Parameters
    ----------
    strict:
        When ``True`` the function raises ``FileNotFoundError`` if no secrets file is
        discovered. Defaults to ``False`` so environment variables alone are enough.
    """

    for path in _candidate_paths():
        if path.is_file():
            return _apply_environment(_extract_settings(_load_toml(path), path))

    if strict:
        raise FileNotFoundError("No secrets file found. Configure ANDROMEDA_SECRETS_PATH or .secrets/secret.toml.")

    return _apply_environment(AndromedaSettings())
