# Shared API response utilities for Lambda handlers
import json
from typing import Dict, Any, Optional

from settings import AppConfig


def cors_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": AppConfig.get_value("cors_origin"),
        "Access-Control-Allow-Headers": "Content-Type,Authorization",
        "Access-Control-Allow-Methods": "GET,OPTIONS",
    }


def api_response(status_code: int, body: Any, headers: Optional[Dict[str, str]] = None) -> dict:
    return {
        "statusCode": status_code,
        "body": json.dumps(body),
        "headers": headers if headers is not None else cors_headers(),
    }


def error_response(status_code: int, message: str) -> dict:
    return api_response(status_code, {"message": message})
