"""Component wiring for the API and the envelope worker.

This module provides:
- build_components: Build the full object graph from settings
- get_components: Process-wide singleton (one credential cache per process)
- get_envelope_handler / get_create_case_callback_service: FastAPI and worker providers

Tests override the providers (app.dependency_overrides) or call
build_components with fakes in place of the HTTP adapters.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .ccd.authenticator import CcdAuthenticatorFactory
from .ccd.auto_case_creator import AutoCaseCreator
from .ccd.callback import (
    CcdNewCaseCreator,
    CreateCaseCallbackService,
    ExceptionRecordFinalizer,
    ExceptionRecordValidator,
)
from .ccd.case_finder import CaseFinder
from .ccd.ccd_api import CcdApi
from .ccd.envelope_handler import EnvelopeHandler
from .ccd.envelope_references import EnvelopeReferenceHelper
from .ccd.evidence_attacher import EvidenceAttacher
from .ccd.exception_record_creator import ExceptionRecordCreator
from .ccd.exception_record_mapper import ExceptionRecordMapper
from .ccd.payments_processor import PaymentsProcessor
from .ccd.transformation_request_creator import TransformationRequestCreator
from .config import Settings, get_settings
from .domain.auth.ports import IdamClientPort, ServiceTokenGeneratorPort
from .domain.cases.ports import CaseBackendPort
from .domain.payments.ports import PaymentsPublisherPort
from .domain.transformation.ports import TransformationPort
from .infrastructure.auth import IdamClient, S2STokenGenerator
from .infrastructure.ccd import HttpCaseBackend
from .infrastructure.payments import HttpPaymentsPublisher
from .infrastructure.transformation import TransformationClient
from .service_config import ServiceConfigProvider


@dataclass
class Components:
    ccd_api: CcdApi
    authenticator_factory: CcdAuthenticatorFactory
    envelope_handler: EnvelopeHandler
    create_case_callback_service: CreateCaseCallbackService


def build_components(
    settings: Settings,
    case_backend: Optional[CaseBackendPort] = None,
    transformation_client: Optional[TransformationPort] = None,
    idam_client: Optional[IdamClientPort] = None,
    s2s_token_generator: Optional[ServiceTokenGeneratorPort] = None,
    payments_publisher: Optional[PaymentsPublisherPort] = None
) -> Components:
    """Build the object graph. Adapters not given are created from settings."""
    timeout = settings.HTTP_TIMEOUT_SECONDS

    case_backend = case_backend or HttpCaseBackend(settings.CCD_API_URL, timeout=timeout)
    transformation_client = transformation_client or TransformationClient(timeout=timeout)
    idam_client = idam_client or IdamClient(
        settings.IDAM_API_URL,
        settings.IDAM_CLIENT_ID,
        settings.IDAM_CLIENT_SECRET,
        settings.IDAM_REDIRECT_URI,
        timeout=timeout,
    )
    s2s_token_generator = s2s_token_generator or S2STokenGenerator(
        settings.S2S_URL,
        settings.S2S_NAME,
        timeout=timeout,
    )
    payments_publisher = payments_publisher or HttpPaymentsPublisher(settings.PAYMENTS_API_URL, timeout=timeout)

    service_config_provider = ServiceConfigProvider(settings.SERVICE_CONFIG)
    authenticator_factory = CcdAuthenticatorFactory(s2s_token_generator, idam_client, settings.IDAM_USERS)
    ccd_api = CcdApi(case_backend, authenticator_factory, service_config_provider)

    envelope_reference_helper = EnvelopeReferenceHelper(service_config_provider)
    request_creator = TransformationRequestCreator(
        settings.DOCUMENT_MANAGEMENT_URL,
        settings.DOCUMENT_MANAGEMENT_CONTEXT_PATH,
    )
    case_finder = CaseFinder(ccd_api)
    payments_processor = PaymentsProcessor(payments_publisher)

    envelope_handler = EnvelopeHandler(
        evidence_attacher=EvidenceAttacher(
            ccd_api,
            envelope_reference_helper,
            settings.DOCUMENT_MANAGEMENT_URL,
            settings.DOCUMENT_MANAGEMENT_CONTEXT_PATH,
        ),
        exception_record_creator=ExceptionRecordCreator(
            ccd_api,
            ExceptionRecordMapper(settings.DOCUMENT_MANAGEMENT_URL, settings.DOCUMENT_MANAGEMENT_CONTEXT_PATH),
        ),
        case_finder=case_finder,
        payments_processor=payments_processor,
        case_creator=AutoCaseCreator(
            transformation_client,
            request_creator,
            s2s_token_generator,
            ccd_api,
            service_config_provider,
            envelope_reference_helper,
        ),
    )

    create_case_callback_service = CreateCaseCallbackService(
        ExceptionRecordValidator(),
        service_config_provider,
        case_finder,
        CcdNewCaseCreator(
            transformation_client,
            request_creator,
            s2s_token_generator,
            ccd_api,
            envelope_reference_helper,
        ),
        ExceptionRecordFinalizer(),
        payments_processor,
    )

    return Components(
        ccd_api=ccd_api,
        authenticator_factory=authenticator_factory,
        envelope_handler=envelope_handler,
        create_case_callback_service=create_case_callback_service,
    )


@lru_cache()
def get_components() -> Components:
    """Process-wide components built from get_settings()."""
    return build_components(get_settings())


def get_envelope_handler() -> EnvelopeHandler:
    return get_components().envelope_handler


def get_create_case_callback_service() -> CreateCaseCallbackService:
    return get_components().create_case_callback_service
