"""
Typed async client for the Andromeda alarm-monitoring REST API.

Import :class:`AndromedaClient` together with the input records from
:mod:`andromeda_api.api` for programmatic access, or use the ``andromeda``
command installed with the package. Credentials can be loaded from a TOML
secrets file or the environment with :func:`load_settings`.
"""

from .api import (
    AndromedaAdapter,
    AndromedaClient,
    AndromedaError,
    APIError,
    Credentials,
    ProviderError,
    RequestFailedError,
    RequestTimeoutError,
    ResponseDecodeError,
    TransportError,
    ValidationError,
)
from .config import AndromedaSettings, load_settings

__all__ = [
    "AndromedaAdapter",
    "AndromedaClient",
    "AndromedaError",
    "AndromedaSettings",
    "APIError",
    "Credentials",
    "ProviderError",
    "RequestFailedError",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "TransportError",
    "ValidationError",
    "load_settings",
]
