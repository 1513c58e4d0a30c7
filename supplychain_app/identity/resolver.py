"""
Identity resolver for invocation credentials.

The creator credential is an envelope (membership provider id plus the
caller's PEM certificate). The certificate is located by its ``-----``
boundary markers, so any envelope that embeds exactly one PEM block works.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from cryptography import x509
from cryptography.x509.oid import NameOID
from structlog.types import FilteringBoundLogger

from ..errors import IdentityError

PEM_MARKER = b"-----"


@dataclass(frozen=True)
class CallerIdentity:
    """Resolved invoking principal."""
    common_name: str
    organization: str
    organization_short: str

    def __str__(self) -> str:
        return f"{self.common_name}@{self.organization_short}"


def extract_certificate_pem(creator: bytes) -> bytes:
    """Slice the PEM block out of a creator envelope."""
    start = creator.find(PEM_MARKER)
    end = creator.rfind(PEM_MARKER)
    if start < 0 or end <= start:
        raise IdentityError(
            "Caller credential does not contain a certificate",
            reason="missing_markers"
        )
    return creator[start:end + len(PEM_MARKER)]


class IdentityResolver:
    """Resolves creator credentials into ``CallerIdentity`` values."""

    def __init__(self, logger: Optional[FilteringBoundLogger] = None):
        self.logger = logger or structlog.get_logger(__name__)

    def resolve(self, creator: bytes, logger: Optional[FilteringBoundLogger] = None) -> CallerIdentity:
        log = logger or self.logger

        if not isinstance(creator, bytes) or not creator:
            raise IdentityError("Caller credential is empty", reason="empty_credential")

        pem = extract_certificate_pem(creator)
        try:
            certificate = x509.load_pem_x509_certificate(pem)
        except ValueError as e:
            raise IdentityError(
                f"Caller certificate could not be parsed: {e}",
                reason="invalid_certificate"
            ) from e

        organizations = certificate.issuer.get_attributes_for_oid(NameOID.ORGANIZATION_NAME)
        if not organizations:
            raise IdentityError(
                "Caller certificate issuer has no organization",
                reason="missing_organization"
            )
        organization = str(organizations[0].value)

        common_names = certificate.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        common_name = str(common_names[0].value) if common_names else ""

        log.debug("Resolved caller identity", common_name=common_name, organization=organization)

        return CallerIdentity(
            common_name=common_name,
            organization=organization,
            organization_short=organization.split(".", 1)[0],
        )


def resolve_identity(creator: bytes) -> CallerIdentity:
    """Resolve a creator credential with a default resolver."""
    return IdentityResolver().resolve(creator)
