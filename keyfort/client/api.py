import logging
from typing import Any, Dict, List, Optional
import requests

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class ApiError(Exception):
    def __init__(self, message: str, status: int, data: Any = None):
        super().__init__(message)
        self.status = status
        self.data = data


def _parse_response(resp: requests.Response) -> Any:
    content_type = resp.headers.get("content-type", "")
    if "application/json" in content_type:
        return resp.json()
    return {"detail": resp.text} if resp.text else None


def _error_message(payload: Any) -> Optional[str]:
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    return None


class VaultApiClient:
    """Thin wrapper over the KeyFort HTTP API.

    Every method returns the decoded JSON body. Non-2xx responses raise
    ApiError carrying the server's ``detail`` message and the status code.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        resp = self.session.request(
            method, f"{self.base_url}{path}", headers=headers, timeout=self.timeout, **kwargs
        )
        payload = _parse_response(resp)
        if resp.status_code >= 400:
            message = _error_message(payload) or "Request failed"
            logger.debug("%s %s failed with %s: %s", method, path, resp.status_code, message)
            raise ApiError(message, resp.status_code, payload)
        return payload

    # --- Account ---
    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/register", json={"name": name, "email": email, "password": password})

    def login(self, email: str, password: str) -> None:
        data = self._request("POST", "/auth/token", data={"username": email, "password": password})
        self.token = data["access_token"]

    def logout(self) -> None:
        self.token = None

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")

    def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/auth/change-password",
            json={"current_password": current_password, "new_password": new_password},
        )

    def delete_account(self) -> Dict[str, Any]:
        result = self._request("DELETE", "/auth/account")
        self.token = None
        return result

    # --- Vault ---
    def list_items(self, category_id: Optional[int] = None, favorites_only: bool = False) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {}
        if category_id is not None:
            params["category_id"] = category_id
        if favorites_only:
            params["is_favorite"] = "true"
        return self._request("GET", f"{API_PREFIX}/vault", params=params)

    def get_item(self, item_id: int) -> Dict[str, Any]:
        return self._request("GET", f"{API_PREFIX}/vault/{item_id}")

    def create_item(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", f"{API_PREFIX}/vault", json=payload)

    def update_item(self, item_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"{API_PREFIX}/vault/{item_id}", json=payload)

    def delete_item(self, item_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"{API_PREFIX}/vault/{item_id}")

    # --- Categories / activity / settings ---
    def list_categories(self) -> List[Dict[str, Any]]:
        return self._request("GET", f"{API_PREFIX}/categories")

    def create_category(self, name: str, color: str) -> Dict[str, Any]:
        return self._request("POST", f"{API_PREFIX}/categories", json={"name": name, "color": color})

    def list_activity(self, limit: int = 50) -> List[Dict[str, Any]]:
        return self._request("GET", f"{API_PREFIX}/activity", params={"limit": limit})

    def get_settings(self) -> Dict[str, Any]:
        return self._request("GET", f"{API_PREFIX}/settings")

    def update_settings(self, **changes) -> Dict[str, Any]:
        return self._request("PUT", f"{API_PREFIX}/settings", json=changes)

    def update_avatar(self, avatar: str) -> Dict[str, Any]:
        return self._request("PUT", f"{API_PREFIX}/settings/avatar", json={"avatar": avatar})
