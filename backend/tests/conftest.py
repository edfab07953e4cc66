"""Pytest fixtures for orchestrator tests.

Provides reusable test fixtures for:
- In-memory CCD data store (two-phase protocol, single-use event tokens)
- Fake IDAM and S2S adapters
- Service configuration for the "bulkscan" test service
- CcdApi wired to the fakes

Usage:
    def test_search(ccd_api, case_backend):
        case_backend.add_case("Bulk_Scanned", {"bulkScanCaseReference": "123"})
        assert ccd_api.get_case_refs_by_bulk_scan_case_reference("123", "bulkscan")
"""

import sys
from pathlib import Path

import pytest

# Adjust imports based on your project structure
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from bulkscan_orchestrator.ccd.authenticator import CcdAuthenticatorFactory
from bulkscan_orchestrator.ccd.ccd_api import CcdApi
from bulkscan_orchestrator.ccd.envelope_references import EnvelopeReferenceHelper
from bulkscan_orchestrator.config import IdamUserCredentials
from bulkscan_orchestrator.service_config import ServiceConfigItem, ServiceConfigProvider

from fixtures.fake_auth import FakeIdamClient, FakeS2STokenGenerator
from fixtures.fake_ccd import InMemoryCaseBackend


SERVICE = "bulkscan"
JURISDICTION = "BULKSCAN"
CASE_TYPE_ID = "Bulk_Scanned"
EXCEPTION_RECORD_CASE_TYPE_ID = "BULKSCAN_ExceptionRecord"
TRANSFORMATION_URL = "http://bulkscan-service/transform"


@pytest.fixture
def service_config_item() -> ServiceConfigItem:
    return ServiceConfigItem(
        service=SERVICE,
        jurisdiction=JURISDICTION,
        transformation_url=TRANSFORMATION_URL,
        case_type_ids=[CASE_TYPE_ID],
        auto_case_creation_enabled=True,
        allow_creating_case_before_payments_are_processed=False,
        case_definition_has_envelope_ids=True,
    )


@pytest.fixture
def service_config_provider(service_config_item) -> ServiceConfigProvider:
    return ServiceConfigProvider([service_config_item])


@pytest.fixture
def case_backend() -> InMemoryCaseBackend:
    return InMemoryCaseBackend()


@pytest.fixture
def idam_client() -> FakeIdamClient:
    return FakeIdamClient()


@pytest.fixture
def s2s_token_generator() -> FakeS2STokenGenerator:
    return FakeS2STokenGenerator()


@pytest.fixture
def authenticator_factory(idam_client, s2s_token_generator) -> CcdAuthenticatorFactory:
    return CcdAuthenticatorFactory(
        s2s_token_generator,
        idam_client,
        {
            JURISDICTION: IdamUserCredentials(username="bulkscan.system@example.com", password="password"),
            "PROBATE": IdamUserCredentials(username="probate.system@example.com", password="password"),
        },
    )


@pytest.fixture
def ccd_api(case_backend, authenticator_factory, service_config_provider) -> CcdApi:
    return CcdApi(case_backend, authenticator_factory, service_config_provider)


@pytest.fixture
def envelope_reference_helper(service_config_provider) -> EnvelopeReferenceHelper:
    return EnvelopeReferenceHelper(service_config_provider)
