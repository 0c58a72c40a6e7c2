# user_api/client.py
"""
Thin HTTP client for the User Management API, used by the Gradio UI.

Every method returns the decoded JSON envelope. Non-2xx answers raise
ApiError carrying the envelope's "error" text; connection problems
propagate as requests exceptions.
"""
from typing import Any, Dict, Optional

import requests

DEFAULT_BACKEND_URL = "http://127.0.0.1:3000"
DEFAULT_TIMEOUT = 10

ROOT_ENDPOINT = "/"
HEALTH_ENDPOINT = "/api/health"
TEST_ENDPOINT = "/api/test"
USERS_ENDPOINT = "/api/users"
USER_ENDPOINT = "/api/users/{user_id}"
DASHBOARD_ENDPOINT = "/api/dashboard"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, payload: Optional[Dict[str, Any]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload


class ApiClient:
    def __init__(self, base_url: str = DEFAULT_BACKEND_URL, timeout: float = DEFAULT_TIMEOUT, session=None):
        self.base_url = (base_url or DEFAULT_BACKEND_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return self.base_url + path

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        r = self.session.request(method, self._url(path), json=json, timeout=self.timeout)
        try:
            payload = r.json()
        except ValueError:
            payload = None
        if r.status_code >= 400:
            message = None
            if isinstance(payload, dict):
                message = payload.get("error") or payload.get("message")
            raise ApiError(r.status_code, message or r.reason or "request failed", payload)
        return payload

    # ---- service ----
    def service_info(self) -> Dict[str, Any]:
        return self._request("GET", ROOT_ENDPOINT)

    def check_health(self) -> Dict[str, Any]:
        return self._request("GET", HEALTH_ENDPOINT)

    def test_connection(self) -> Dict[str, Any]:
        return self._request("GET", TEST_ENDPOINT)

    # ---- users ----
    def get_users(self) -> Dict[str, Any]:
        return self._request("GET", USERS_ENDPOINT)

    def get_user(self, user_id: int) -> Dict[str, Any]:
        return self._request("GET", USER_ENDPOINT.format(user_id=user_id))

    def create_user(self, user: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", USERS_ENDPOINT, json=user)

    def update_user(self, user_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", USER_ENDPOINT.format(user_id=user_id), json=changes)

    def delete_user(self, user_id: int) -> Dict[str, Any]:
        return self._request("DELETE", USER_ENDPOINT.format(user_id=user_id))

    # ---- dashboard ----
    def get_dashboard(self) -> Dict[str, Any]:
        return self._request("GET", DASHBOARD_ENDPOINT)
