import os
from typing import Any, Dict, List, Optional

import requests

from sweetshop.client.session import SessionStore

DEFAULT_API_URL = "http://localhost:8000/api"

class ApiClientError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message

class SweetShopClient:
    """
    HTTP client for the Sweet Shop API.

    Every call unwraps the {success, message, data} envelope and returns
    ``data``; failures raise ApiClientError with the server's message.
    ``http`` may be any requests-compatible session (FastAPI's TestClient
    included).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[SessionStore] = None,
        http: Optional[Any] = None,
        timeout: float = 10.0,
    ):
        self.base_url = (base_url or os.getenv("SWEETSHOP_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.session = session or SessionStore()
        self.http = http or requests.Session()
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        headers = {}
        token = self.session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = self.http.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            params=params,
            headers=headers,
            timeout=self.timeout,
        )
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code >= 400 or not payload.get("success", False):
            message = payload.get("message") or f"Request failed with status {response.status_code}"
            raise ApiClientError(response.status_code, message)
        return payload.get("data")

    # ---- auth ----

    def register(self, name: str, email: str, password: str, role: str = "user") -> Dict[str, Any]:
        data = self._request(
            "POST",
            "/auth/register",
            json={"name": name, "email": email, "password": password, "role": role},
        )
        self.session.save(data["token"], data["user"])
        return data["user"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.session.save(data["token"], data["user"])
        return data["user"]

    def logout(self) -> None:
        self.session.clear()

    def current_user(self) -> Optional[Dict[str, Any]]:
        return self.session.user

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")["user"]

    # ---- sweets ----

    def get_sweets(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/sweets")["sweets"]

    def search_sweets(
        self,
        q: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = {
            "q": q,
            "category": category,
            "minPrice": min_price,
            "maxPrice": max_price,
            "page": page,
            "limit": limit,
        }
        return self._request(
            "GET",
            "/sweets/search",
            params={k: v for k, v in params.items() if v not in (None, "")},
        )

    def create_sweet(self, sweet: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/sweets", json=sweet)["sweet"]

    def update_sweet(self, sweet_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/sweets/{sweet_id}", json=changes)["sweet"]

    def delete_sweet(self, sweet_id: str) -> None:
        self._request("DELETE", f"/sweets/{sweet_id}")

    def purchase_sweet(self, sweet_id: str, quantity: int = 1) -> Dict[str, Any]:
        return self._request("POST", f"/sweets/{sweet_id}/purchase", json={"quantity": quantity})["sweet"]

    def restock_sweet(self, sweet_id: str, quantity: int) -> Dict[str, Any]:
        return self._request("POST", f"/sweets/{sweet_id}/restock", json={"quantity": quantity})["sweet"]

    def health(self) -> Dict[str, Any]:
        # /health is served outside the API prefix
        root = self.base_url[: -len("/api")] if self.base_url.endswith("/api") else self.base_url
        response = self.http.request("GET", f"{root}/health", timeout=self.timeout)
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.status_code >= 400:
            raise ApiClientError(response.status_code, payload.get("message") or "Health check failed")
        return payload.get("data") or {}
