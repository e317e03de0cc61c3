"""
Connectivity check for an Andromeda installation.

The adapter issues a single ``GET /Sites`` for a known site and reports the
outcome as a :class:`VerificationResult` instead of raising, which keeps it
usable from health checks and the ``andromeda verify`` command.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .client import AndromedaClient
from .errors import AndromedaError, ValidationError
from .models import Credentials, GetSiteInput


@dataclass(slots=True)
class VerificationResult:
    """
    Structured response returned by :meth:`AndromedaAdapter.verify`.

    Attributes
    ----------
    success:
        Indicates whether the verification succeeded.
    message:
        Human-readable summary.
    details:
        Optional structured metadata about the probed site.
    """

    success: bool
    message: str
    details: Optional[Mapping[str, object]] = None


@dataclass(slots=True)
class AndromedaAdapter:
    """Adapter used for connectivity verification."""

    client: AndromedaClient
    credentials: Credentials
    site_id: Optional[str] = None
    user_name: str = ""

    async def verify(self) -> VerificationResult:
        if not self.site_id:
            return VerificationResult(
                success=False,
                message="Andromeda verification requires a site identifier. Configure andromeda.site_id or ANDROMEDA_SITE_ID.",
                details={"reason": "missing-site-id"},
            )
        try:
            site = await self.client.get_site(GetSiteInput(self.site_id, self.credentials, user_name=self.user_name))
        except ValidationError as exc:
            return VerificationResult(success=False, message=f"Andromeda settings are invalid: {exc}", details={"field": exc.field})
        except AndromedaError as exc:
            return VerificationResult(success=False, message=f"Andromeda API verification failed: {exc}")

        return VerificationResult(
            success=True,
            message="Andromeda API reachable.",
            details={
                "site_id": site.id,
                "account_number": site.account_number,
                "name": site.name,
            },
        )
