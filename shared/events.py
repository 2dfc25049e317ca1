from typing import Dict, Any, Optional


class EventParser:
    """Utility for parsing API Gateway events"""

    @staticmethod
    def query_params(event: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Return the query string parameters, empty when the event has none"""
        if not isinstance(event, dict):
            return {}
        params = event.get("queryStringParameters")
        return params if isinstance(params, dict) else {}

    @classmethod
    def extract_query(cls, event: Optional[Dict[str, Any]], fallback: str) -> str:
        """Extract the search term `q`, using `fallback` when absent or empty"""
        q = cls.query_params(event).get("q")
        return str(q) if q else fallback

    @staticmethod
    def http_method(event: Optional[Dict[str, Any]]) -> str:
        """HTTP method for REST (v1) and HTTP (v2) API payloads, GET by default"""
        if not isinstance(event, dict):
            return "GET"
        method = event.get("httpMethod")
        if not method:
            context = event.get("requestContext")
            http = context.get("http") if isinstance(context, dict) else None
            method = http.get("method") if isinstance(http, dict) else None
        return str(method or "GET").upper()
