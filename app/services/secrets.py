"""Secret vault access (AWS Secrets Manager) and credential resolution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import Settings
from app.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class SecretProvider:
    """Reads secret strings from AWS Secrets Manager."""

    def __init__(
        self,
        region: str = "ap-northeast-2",
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
    ) -> None:
        self.client = boto3.client(
            "secretsmanager",
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region,
        )

    def get_secret(self, secret_id: str) -> str:
        response = self.client.get_secret_value(SecretId=secret_id)
        secret = response.get("SecretString")
        if secret is None:
            raise ConfigurationError(f"Secret {secret_id} has no string value.")
        return secret


def resolve_google_credentials(
    settings: Settings,
    secret_provider: SecretProvider | None = None,
) -> str | None:
    """Return the service account JSON from env, file or vault (in that order)."""
    if settings.google_credentials_json:
        return settings.google_credentials_json

    if settings.google_credentials_file:
        path = Path(settings.google_credentials_file)
        if not path.exists():
            raise ConfigurationError(f"Google credentials file not found: {path}")
        return path.read_text(encoding="utf-8")

    if settings.google_credentials_secret_id:
        provider = secret_provider or SecretProvider(region=settings.secrets_region)
        try:
            secret = provider.get_secret(settings.google_credentials_secret_id)
        except (ClientError, BotoCoreError) as exc:
            raise ConfigurationError(
                f"Could not read secret {settings.google_credentials_secret_id}: {exc}"
            ) from exc
        logger.info("Loaded Google credentials from secret %s", settings.google_credentials_secret_id)
        return secret

    return None
