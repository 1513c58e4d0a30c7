"""Pytest configuration and shared fixtures."""

import json
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from supplychain_app.config.loader import ConfigLoader, ContractSettings
from supplychain_app.contracts import OrderContract, TransportContract
from supplychain_app.ledger.memory import InMemoryLedger


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if not value:
            out.append(byte)
            return bytes(out)
        out.append(byte | 0x80)


def serialize_identity(msp_id: str, certificate_pem: bytes) -> bytes:
    """Creator envelope as the host serializes it: field 1 msp id, field 2 certificate."""
    msp = msp_id.encode("utf-8")
    return (
        b"\x0a" + _encode_varint(len(msp)) + msp
        + b"\x12" + _encode_varint(len(certificate_pem)) + certificate_pem
    )


@lru_cache(maxsize=None)
def _signing_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


def issue_certificate(
    issuer_organization: str = "retailer.example.com",
    common_name: str = "User1@retailer.example.com",
    include_organization: bool = True,
) -> bytes:
    """Issue a PEM user certificate whose issuer carries ``issuer_organization``."""
    key = _signing_key()
    issuer_attrs = [x509.NameAttribute(NameOID.COUNTRY_NAME, "US")]
    if include_organization:
        issuer_attrs.append(x509.NameAttribute(NameOID.ORGANIZATION_NAME, issuer_organization))
    issuer_attrs.append(x509.NameAttribute(NameOID.COMMON_NAME, f"ca.{issuer_organization}"))

    subject_attrs = []
    if common_name:
        subject_attrs.append(x509.NameAttribute(NameOID.COMMON_NAME, common_name))

    now = datetime.now(timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(x509.Name(subject_attrs))
        .issuer_name(x509.Name(issuer_attrs))
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=365))
        .sign(key, hashes.SHA256())
    )
    return certificate.public_bytes(serialization.Encoding.PEM)


@lru_cache(maxsize=None)
def creator_for(org: str, user: str = "User1") -> bytes:
    """Creator envelope for ``user`` of ``<org>.example.com``."""
    domain = f"{org}.example.com"
    pem = issue_certificate(domain, f"{user}@{domain}")
    return serialize_identity(f"{org.capitalize()}MSP", pem)


def order_json(order_id: str = "O1", price: float = 9.99, qty: int = 3,
               status: str = "open") -> str:
    return json.dumps({"id": order_id, "price": price, "qty": qty, "status": status})


def transport_json(transport_id: str = "T1", qty: int = 5, statuses=None) -> str:
    return json.dumps({"id": transport_id, "qty": qty, "statuses": statuses or []})


@pytest.fixture
def make_creator() -> Callable[..., bytes]:
    return creator_for


@pytest.fixture
def retailer() -> bytes:
    return creator_for("retailer")


@pytest.fixture
def distributor() -> bytes:
    return creator_for("distributor")


@pytest.fixture
def carrier() -> bytes:
    return creator_for("carrier")


@pytest.fixture
def settings(tmp_path: Path) -> ContractSettings:
    """Default settings, unaffected by the repository's contracts.yaml."""
    return ConfigLoader.create(tmp_path).load_settings()


@pytest.fixture
def strict_settings(tmp_path: Path) -> ContractSettings:
    return ConfigLoader.create(tmp_path).load_settings(
        overrides={"orders": {"enforce_transitions": True}}
    )


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger(channel="distributor-production")


@pytest.fixture
def upstream_ledger() -> InMemoryLedger:
    return InMemoryLedger(channel="retailer-distributor")


@pytest.fixture
def order_contract(settings: ContractSettings) -> OrderContract:
    return OrderContract(settings=settings)


@pytest.fixture
def transport_contract(settings: ContractSettings) -> TransportContract:
    return TransportContract(settings=settings)


@pytest.fixture
def sample_order() -> Dict[str, Any]:
    return {"id": "O1", "price": 9.99, "qty": 3, "status": "open"}
