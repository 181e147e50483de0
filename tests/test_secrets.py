"""Tests for Google credential resolution."""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from app.core.config import Settings
from app.core.exceptions import ConfigurationError
from app.services.secrets import SecretProvider, resolve_google_credentials


def make_settings(**overrides):
    values = {
        "google_credentials_json": None,
        "google_credentials_file": None,
        "google_credentials_secret_id": None,
    }
    values.update(overrides)
    return Settings(**values)


def test_inline_json_wins():
    provider = MagicMock()
    settings = make_settings(google_credentials_json='{"type": "service_account"}', google_credentials_secret_id="x")

    assert resolve_google_credentials(settings, provider) == '{"type": "service_account"}'
    provider.get_secret.assert_not_called()


def test_file_is_read(tmp_path):
    path = tmp_path / "sa.json"
    path.write_text('{"type": "service_account"}', encoding="utf-8")

    assert resolve_google_credentials(make_settings(google_credentials_file=str(path))) == '{"type": "service_account"}'


def test_missing_file_is_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        resolve_google_credentials(make_settings(google_credentials_file=str(tmp_path / "nope.json")))


def test_secret_is_fetched_from_vault():
    provider = MagicMock()
    provider.get_secret.return_value = '{"type": "service_account"}'

    result = resolve_google_credentials(make_settings(google_credentials_secret_id="google/sa"), provider)

    assert result == '{"type": "service_account"}'
    provider.get_secret.assert_called_once_with("google/sa")


def test_vault_error_is_configuration_error():
    provider = MagicMock()
    provider.get_secret.side_effect = ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "not found"}}, "GetSecretValue"
    )

    with pytest.raises(ConfigurationError):
        resolve_google_credentials(make_settings(google_credentials_secret_id="google/sa"), provider)


def test_nothing_configured_returns_none():
    assert resolve_google_credentials(make_settings()) is None


def test_secret_provider_reads_secret_string():
    with patch("app.services.secrets.boto3.client") as client_factory:
        client_factory.return_value.get_secret_value.return_value = {"SecretString": "value"}
        provider = SecretProvider(region="eu-west-1")

        assert provider.get_secret("name") == "value"

    client_factory.assert_called_once()
    assert client_factory.call_args.args == ("secretsmanager",)
    assert client_factory.call_args.kwargs["region_name"] == "eu-west-1"


def test_secret_provider_rejects_binary_secret():
    with patch("app.services.secrets.boto3.client") as client_factory:
        client_factory.return_value.get_secret_value.return_value = {"SecretBinary": b"xx"}
        provider = SecretProvider()

        with pytest.raises(ConfigurationError):
            provider.get_secret("name")
