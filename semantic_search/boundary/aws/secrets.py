"""
Connection string lookup.

Uses the configured URI directly, otherwise reads it from a Secrets Manager
secret whose value is JSON of the form {"url": "<connection string>"}.

Dependencies: boto3
System role: Resolve the document store connection string location reference
"""

import json
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from semantic_search.configs.mongodb import MongoSettings
from semantic_search.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def resolve_connection_string(settings: MongoSettings, client: Any | None = None) -> str:
    """
    Resolve the MongoDB connection string.

    Args:
        settings: MongoDB settings
        client: Pre-built boto3 Secrets Manager client (mainly for tests)

    Returns:
        str: MongoDB connection string

    Raises:
        ConfigurationError: Nothing configured, secret unreadable or missing "url"
    """
    if settings.uri:
        return settings.uri

    secret_name = settings.connection_string_secret_name
    if not secret_name:
        raise ConfigurationError("MongoDB connection string location is not configured")

    client = client or boto3.session.Session().client("secretsmanager")
    try:
        response = client.get_secret_value(SecretId=secret_name)
        secret = json.loads(response.get("SecretString") or "{}")
    except (BotoCoreError, ClientError) as e:
        logger.error("resolve_connection_string - Failed to fetch secret: %s", e)
        raise ConfigurationError(
            "Unable to read MongoDB connection string secret",
            details={"secret_name": secret_name},
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            "MongoDB connection string secret is not valid JSON",
            details={"secret_name": secret_name},
        ) from e

    url = secret.get("url") if isinstance(secret, dict) else None
    if not url:
        raise ConfigurationError(
            "MongoDB connection string not found",
            details={"secret_name": secret_name},
        )

    logger.info("resolve_connection_string - Loaded connection string from secret")
    return url
