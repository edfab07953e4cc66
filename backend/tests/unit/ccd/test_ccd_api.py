"""Unit tests for the CCD API facade.

Tests case searches, named retrieval failures, the two-phase write protocol
and credential eviction on 401/403.
"""

import json

import httpx
import pytest

from bulkscan_orchestrator.ccd.ccd_api import CcdApi, match_phrase_query
from bulkscan_orchestrator.ccd.errors import (
    CaseNotFoundError,
    CcdCallError,
    InvalidCaseIdError,
    UnableToAttachDocumentsError,
)
from bulkscan_orchestrator.domain.cases.models import CaseDataContent, Event
from bulkscan_orchestrator.domain.cases.ports import CaseBackendError
from bulkscan_orchestrator.infrastructure.ccd import HttpCaseBackend
from bulkscan_orchestrator.service_config import ServiceConfigItem, ServiceConfigProvider


def content_builder(data):
    def build(start_response):
        return CaseDataContent(
            data=data,
            event=Event(id=start_response.event_id, summary="summary"),
            event_token=start_response.token,
        )
    return build


class TestMatchPhraseQuery:
    """Test search query format."""

    def test_query_matches_single_field(self):
        """Test query is a JSON match_phrase query."""
        query = json.loads(match_phrase_query("data.envelopeId", "env-1"))

        assert query == {"query": {"match_phrase": {"data.envelopeId": "env-1"}}}


class TestCaseRetrieval:
    """Test get_case and its named failures."""

    def test_get_case(self, ccd_api, case_backend):
        """Test existing case is returned."""
        case = case_backend.add_case("Bulk_Scanned", {"firstName": "John"})

        found = ccd_api.get_case(str(case.id), "BULKSCAN")

        assert found.id == case.id
        assert found.data == {"firstName": "John"}

    def test_case_not_found(self, ccd_api):
        """Test 404 is reported as CaseNotFoundError."""
        with pytest.raises(CaseNotFoundError):
            ccd_api.get_case("1234567890123456", "BULKSCAN")

    def test_invalid_case_id(self, ccd_api):
        """Test 400 is reported as InvalidCaseIdError."""
        with pytest.raises(InvalidCaseIdError):
            ccd_api.get_case("not-a-number", "BULKSCAN")

    def test_other_failure(self, ccd_api, case_backend):
        """Test other statuses are reported as CcdCallError."""
        case_backend.fail("get_case", 500)

        with pytest.raises(CcdCallError) as exc_info:
            ccd_api.get_case("1234567890123456", "BULKSCAN")

        assert not isinstance(exc_info.value, (CaseNotFoundError, InvalidCaseIdError))
        assert exc_info.value.status_code == 500

    def test_malformed_response(self, authenticator_factory, service_config_provider):
        """Test unparseable CCD body is reported as CcdCallError."""
        backend = HttpCaseBackend(
            "http://ccd:4452",
            client=httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))),
        )
        ccd_api = CcdApi(backend, authenticator_factory, service_config_provider)

        with pytest.raises(CcdCallError) as exc_info:
            ccd_api.get_case("1234567890123456", "BULKSCAN")

        assert not isinstance(exc_info.value, (CaseNotFoundError, InvalidCaseIdError))

    def test_calls_use_cached_user_token_and_fresh_service_token(self, ccd_api, case_backend):
        """Test credentials sent to CCD."""
        case = case_backend.add_case("Bulk_Scanned", {})

        ccd_api.get_case(str(case.id), "BULKSCAN")
        ccd_api.get_case(str(case.id), "BULKSCAN")

        assert [call[1] for call in case_backend.calls] == ["Bearer user-token-1", "Bearer user-token-1"]
        assert [call[2] for call in case_backend.calls] == ["Bearer s2s-token-1", "Bearer s2s-token-2"]


class TestCredentialEviction:
    """Test cached credentials are dropped only when CCD rejects them."""

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_failure_on_get_case_evicts_credential(self, ccd_api, case_backend, authenticator_factory, status_code):
        """Test 401/403 removes the jurisdiction's credential."""
        case_backend.fail("get_case", status_code)

        with pytest.raises(CcdCallError):
            ccd_api.get_case("1234567890123456", "BULKSCAN")

        assert not authenticator_factory.is_cached("BULKSCAN")

    def test_eviction_is_scoped_to_jurisdiction(self, ccd_api, case_backend, authenticator_factory):
        """Test other jurisdictions keep their credentials."""
        authenticator_factory.create_for_jurisdiction("PROBATE")
        case_backend.fail("get_case", 401)

        with pytest.raises(CcdCallError):
            ccd_api.get_case("1234567890123456", "BULKSCAN")

        assert authenticator_factory.is_cached("PROBATE")

    @pytest.mark.parametrize("status_code", [400, 404, 500, None])
    def test_other_failures_keep_credential(self, ccd_api, case_backend, authenticator_factory, status_code):
        """Test non-auth failures leave the cache alone."""
        case_backend.fail("get_case", status_code)

        with pytest.raises(CcdCallError):
            ccd_api.get_case("1234567890123456", "BULKSCAN")

        assert authenticator_factory.is_cached("BULKSCAN")

    def test_auth_failure_on_search_evicts_credential(self, ccd_api, case_backend, authenticator_factory):
        """Test search failures are re-raised after eviction."""
        case_backend.fail("search_cases", 403)

        with pytest.raises(CaseBackendError) as exc_info:
            ccd_api.get_case_refs_by_envelope_id("env-1", "bulkscan")

        assert exc_info.value.status_code == 403
        assert not authenticator_factory.is_cached("BULKSCAN")

    def test_new_login_after_eviction(self, ccd_api, case_backend, idam_client):
        """Test next call after eviction uses a new credential."""
        case = case_backend.add_case("Bulk_Scanned", {})
        case_backend.fail("get_case", 401)

        with pytest.raises(CcdCallError):
            ccd_api.get_case(str(case.id), "BULKSCAN")
        ccd_api.get_case(str(case.id), "BULKSCAN")

        assert len(idam_client.logins) == 2
        assert case_backend.calls[-1][1] == "Bearer user-token-2"


class TestCaseSearches:
    """Test searches by correlation key."""

    def test_case_refs_by_envelope_id(self, ccd_api, case_backend):
        """Test cases created or updated from the envelope are found."""
        case = case_backend.add_case(
            "Bulk_Scanned",
            {"bulkScanEnvelopes": [{"value": {"id": "env-1", "action": "create"}}]},
        )
        case_backend.add_case(
            "Bulk_Scanned",
            {"bulkScanEnvelopes": [{"value": {"id": "env-2", "action": "create"}}]},
        )

        assert ccd_api.get_case_refs_by_envelope_id("env-1", "bulkscan") == [case.id]

    def test_case_refs_by_envelope_id_ignores_other_case_types(self, ccd_api, case_backend):
        """Test only the service's case types are searched."""
        case_backend.add_case(
            "Other_Case_Type",
            {"bulkScanEnvelopes": [{"value": {"id": "env-1", "action": "create"}}]},
        )

        assert ccd_api.get_case_refs_by_envelope_id("env-1", "bulkscan") == []

    def test_exception_record_refs_by_envelope_id(self, ccd_api, case_backend):
        """Test exception records are searched in the exception record case type."""
        record = case_backend.add_case("BULKSCAN_ExceptionRecord", {"envelopeId": "env-1"})
        case_backend.add_case("Bulk_Scanned", {"envelopeId": "env-1"})

        assert ccd_api.get_exception_record_refs_by_envelope_id("env-1", "bulkscan") == [record.id]

    def test_case_refs_by_legacy_id(self, ccd_api, case_backend):
        """Test search by reference in the service's previous system."""
        case = case_backend.add_case("Bulk_Scanned", {}, legacy_id="LEGACY-1")
        case_backend.add_case("Bulk_Scanned", {}, legacy_id="LEGACY-2")

        assert ccd_api.get_case_refs_by_legacy_id("LEGACY-1", "bulkscan") == [case.id]

    def test_case_refs_by_bulk_scan_case_reference(self, ccd_api, case_backend):
        """Test cases created from an exception record are found."""
        case = case_backend.add_case("Bulk_Scanned", {"bulkScanCaseReference": "123"})

        assert ccd_api.get_case_refs_by_bulk_scan_case_reference("123", "bulkscan") == [case.id]

    def test_searches_skipped_without_case_types(self, case_backend, authenticator_factory):
        """Test services without case types are not searched."""
        provider = ServiceConfigProvider([ServiceConfigItem(service="bulkscan", jurisdiction="BULKSCAN")])
        ccd_api = CcdApi(case_backend, authenticator_factory, provider)

        assert ccd_api.get_case_refs_by_legacy_id("LEGACY-1", "bulkscan") == []
        assert ccd_api.get_case_refs_by_envelope_id("env-1", "bulkscan") == []
        assert case_backend.calls == []


class TestTwoPhaseWrites:
    """Test start event -> build payload -> submit event."""

    def test_create_case(self, ccd_api, case_backend):
        """Test case is created with the payload built from the start response."""
        case_id = ccd_api.create_case(
            "BULKSCAN",
            "Bulk_Scanned",
            "createCase",
            content_builder({"firstName": "John"}),
            "Envelope ID: env-1."
        )

        assert case_backend.cases[case_id].data == {"firstName": "John"}
        assert case_backend.operations() == ["start_for_create", "submit_for_create"]

    def test_every_write_uses_a_new_event_token(self, ccd_api, case_backend):
        """Test event tokens are never reused."""
        ccd_api.create_case("BULKSCAN", "Bulk_Scanned", "createCase", content_builder({}), "")
        ccd_api.create_case("BULKSCAN", "Bulk_Scanned", "createCase", content_builder({}), "")

        tokens = [content.event_token for content in case_backend.submitted]
        assert len(set(tokens)) == 2

    def test_submit_with_stale_token_fails(self, ccd_api, case_backend):
        """Test a token can only be submitted once."""
        captured = []

        def reuse_first_token(start_response):
            captured.append(start_response.token)
            return CaseDataContent(data={}, event=Event(id=start_response.event_id), event_token=captured[0])

        ccd_api.create_case("BULKSCAN", "Bulk_Scanned", "createCase", reuse_first_token, "")

        with pytest.raises(CaseBackendError) as exc_info:
            ccd_api.create_case("BULKSCAN", "Bulk_Scanned", "createCase", reuse_first_token, "")

        assert exc_info.value.status_code == 409

    def test_create_case_auth_failure_evicts_credential(self, ccd_api, case_backend, authenticator_factory):
        """Test submit rejected with 401 evicts and re-raises."""
        case_backend.fail("submit_for_create", 401)

        with pytest.raises(CaseBackendError):
            ccd_api.create_case("BULKSCAN", "Bulk_Scanned", "createCase", content_builder({}), "")

        assert not authenticator_factory.is_cached("BULKSCAN")

    def test_create_exception_record(self, ccd_api, case_backend):
        """Test exception record creation returns the created case."""
        authenticator = ccd_api.authenticate_jurisdiction("BULKSCAN")

        created = ccd_api.create_exception_record(
            authenticator,
            "BULKSCAN",
            "BULKSCAN_ExceptionRecord",
            "createException",
            content_builder({"envelopeId": "env-1"}),
            ""
        )

        assert created.case_type_id == "BULKSCAN_ExceptionRecord"
        assert case_backend.cases[created.id].data == {"envelopeId": "env-1"}

    def test_attach_scanned_docs(self, ccd_api, case_backend):
        """Test update event receives the current case snapshot."""
        case = case_backend.add_case("Bulk_Scanned", {"firstName": "John"})
        snapshots = []

        def builder(start_response):
            snapshots.append(start_response.case_details)
            return content_builder({"lastName": "Smith"})(start_response)

        ccd_api.attach_scanned_docs(
            ccd_api.authenticate_jurisdiction("BULKSCAN"),
            "BULKSCAN",
            "Bulk_Scanned",
            str(case.id),
            "attachScannedDocs",
            builder,
            ""
        )

        assert snapshots[0].data == {"firstName": "John"}
        assert case_backend.cases[case.id].data == {"firstName": "John", "lastName": "Smith"}

    def test_attach_to_missing_case(self, ccd_api, authenticator_factory):
        """Test 404 is reported as UnableToAttachDocumentsError without eviction."""
        with pytest.raises(UnableToAttachDocumentsError):
            ccd_api.attach_scanned_docs(
                ccd_api.authenticate_jurisdiction("BULKSCAN"),
                "BULKSCAN",
                "Bulk_Scanned",
                "1234567890123456",
                "attachScannedDocs",
                content_builder({}),
                ""
            )

        assert authenticator_factory.is_cached("BULKSCAN")

    def test_attach_auth_failure_evicts_credential(self, ccd_api, case_backend, authenticator_factory):
        """Test 403 on submit is a CcdCallError and evicts."""
        case = case_backend.add_case("Bulk_Scanned", {})
        case_backend.fail("submit_event_for_case", 403)

        with pytest.raises(CcdCallError) as exc_info:
            ccd_api.attach_scanned_docs(
                ccd_api.authenticate_jurisdiction("BULKSCAN"),
                "BULKSCAN",
                "Bulk_Scanned",
                str(case.id),
                "attachScannedDocs",
                content_builder({}),
                ""
            )

        assert not isinstance(exc_info.value, UnableToAttachDocumentsError)
        assert not authenticator_factory.is_cached("BULKSCAN")

    def test_create_new_case_from_callback_uses_caller_credentials(self, ccd_api, case_backend, idam_client):
        """Test callback case creation uses the caseworker's tokens."""
        case_id = ccd_api.create_new_case_from_callback(
            "Bearer caseworker-token",
            "Bearer caller-s2s",
            "caseworker-1",
            "BULKSCAN",
            "Bulk_Scanned",
            "createCase",
            content_builder({"bulkScanCaseReference": "123"}),
            ""
        )

        assert case_backend.cases[case_id].data == {"bulkScanCaseReference": "123"}
        assert {call[1] for call in case_backend.calls} == {"Bearer caseworker-token"}
        assert {call[2] for call in case_backend.calls} == {"Bearer caller-s2s"}
        assert idam_client.logins == []

    def test_create_new_case_from_callback_auth_failure_keeps_cache(
        self, ccd_api, case_backend, authenticator_factory
    ):
        """Test caller token rejection does not touch the system user cache."""
        authenticator_factory.create_for_jurisdiction("BULKSCAN")
        case_backend.fail("start_for_create", 401)

        with pytest.raises(CaseBackendError):
            ccd_api.create_new_case_from_callback(
                "Bearer caseworker-token", "Bearer s2s", "caseworker-1",
                "BULKSCAN", "Bulk_Scanned", "createCase", content_builder({}), ""
            )

        assert authenticator_factory.is_cached("BULKSCAN")
