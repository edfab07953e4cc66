"""Unit tests for environment-driven settings."""

import json

from bulkscan_orchestrator.config import Settings
from bulkscan_orchestrator.service_config import ServiceConfigProvider


class TestSettings:
    """Test Settings parsing from environment variables."""

    def test_defaults(self):
        """Test development defaults without environment."""
        settings = Settings(_env_file=None)

        assert settings.SERVICE_CONFIG == []
        assert settings.IDAM_USERS == {}
        assert settings.ENVELOPES_QUEUE_NAME == "envelopes"

    def test_service_config_from_json(self, monkeypatch):
        """Test SERVICE_CONFIG is parsed into service config items."""
        monkeypatch.setenv("SERVICE_CONFIG", json.dumps([
            {
                "service": "bulkscan",
                "jurisdiction": "BULKSCAN",
                "transformation_url": "http://bulkscan-service/transform",
                "case_type_ids": ["Bulk_Scanned"],
                "auto_case_creation_enabled": True,
            }
        ]))

        settings = Settings(_env_file=None)
        config = ServiceConfigProvider(settings.SERVICE_CONFIG).get_config("bulkscan")

        assert config.jurisdiction == "BULKSCAN"
        assert config.case_type_ids == ["Bulk_Scanned"]
        assert config.auto_case_creation_enabled is True
        assert config.case_definition_has_envelope_ids is False

    def test_idam_users_from_json(self, monkeypatch):
        """Test IDAM_USERS maps jurisdictions to credentials."""
        monkeypatch.setenv("IDAM_USERS", json.dumps({
            "BULKSCAN": {"username": "bulkscan+ccd@example.com", "password": "secret"},
        }))

        settings = Settings(_env_file=None)

        assert settings.IDAM_USERS["BULKSCAN"].username == "bulkscan+ccd@example.com"
        assert settings.IDAM_USERS["BULKSCAN"].password == "secret"
