"""Tests for production service wiring."""
# pylint: disable=missing-function-docstring

from cryptography.hazmat.primitives import serialization

from meteosat_skill.bootstrap import build_default_service_container, build_request_verifier
from meteosat_skill.core.config import config as app_config
from meteosat_skill.services.signature_verifier import RequestVerifier, load_trusted_roots


def test_default_container_carries_verifier_and_router():
    services = build_default_service_container()
    assert isinstance(services.verifier, RequestVerifier)
    assert services.intent_router is not None


def test_default_trusted_roots_come_from_certifi():
    assert len(load_trusted_roots()) > 10


def test_trusted_roots_path_override(tmp_path, monkeypatch, pki):
    bundle = tmp_path / "roots.pem"
    bundle.write_bytes(pki.root_cert.public_bytes(serialization.Encoding.PEM))
    monkeypatch.setattr(app_config, "TRUSTED_ROOTS_PATH", bundle, raising=True)

    assert load_trusted_roots(bundle) == [pki.root_cert]
    assert isinstance(build_request_verifier(), RequestVerifier)
