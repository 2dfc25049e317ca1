from typing import Optional

import boto3

from settings import AppConfig


def get_secrets_client(region_name: Optional[str] = None):
    return boto3.client(
        "secretsmanager",
        region_name=region_name or AppConfig.get_value("aws_region"),
    )


def get_secret_string(secret_name: str, client=None) -> str:
    """
    Fetch a secret's string payload from AWS Secrets Manager.
    Errors (missing secret, access denied, network) are raised to the caller.
    """
    client = client or get_secrets_client()
    response = client.get_secret_value(SecretId=secret_name)
    secret_string = response.get("SecretString")
    if secret_string is None:
        raise ValueError(f"Secret {secret_name} has no SecretString payload")
    return secret_string
