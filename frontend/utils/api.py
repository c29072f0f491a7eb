from typing import Any, Optional

import requests
import streamlit as st


class APIClient:
    """Simple API client for backend requests.

    Every call returns ``{"status": code, "data": ...}``, or
    ``{"status": 0, "error": message}`` when the backend is unreachable.
    """

    def __init__(self, base_url: str, timeout: int = 30):
        self.base_url = base_url
        self.timeout = timeout

    def _headers(self) -> dict:
        return {"Content-Type": "application/json"}

    def _params(self, params: Optional[dict] = None) -> dict:
        """Copy params and add the token as query param if available."""
        params = dict(params or {})
        token = st.session_state.get("token")
        if token:
            params["token"] = token
        return params

    def _parse_json(self, resp) -> Any:
        """Safely parse JSON, return None or text on failure."""
        if resp is None or not resp.text:
            return None
        try:
            return resp.json()
        except ValueError:
            return {"raw": resp.text}

    def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[dict] = None,
        params: Optional[dict] = None,
        raw: bool = False,
    ) -> dict:
        try:
            resp = requests.request(
                method,
                f"{self.base_url}{endpoint}",
                headers=self._headers(),
                json=data,
                params=self._params(params),
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError:
            return {"status": 0, "error": "Cannot connect to backend"}
        except requests.exceptions.RequestException as e:
            return {"status": 0, "error": str(e)}

        if raw and resp.ok:
            return {"status": resp.status_code, "data": resp.content}
        return {"status": resp.status_code, "data": self._parse_json(resp)}

    def _get(self, endpoint: str, params: Optional[dict] = None) -> dict:
        return self._request("GET", endpoint, params=params)

    def _post(self, endpoint: str, data: Optional[dict] = None, params: Optional[dict] = None) -> dict:
        return self._request("POST", endpoint, data=data or {}, params=params)

    def _put(self, endpoint: str, data: dict) -> dict:
        return self._request("PUT", endpoint, data=data)

    def _delete(self, endpoint: str) -> dict:
        return self._request("DELETE", endpoint)

    # Auth endpoints
    def sign_in(self, email: str, password: str) -> dict:
        """Sign in, creating the account on first use."""
        return self._post("/auth/sign-in", {"email": email, "password": password})

    def register(self, email: str, password: str, password_confirm: str) -> dict:
        return self._post("/auth/register", {
            "email": email,
            "password": password,
            "password_confirm": password_confirm,
        })

    # Catalog endpoints
    def list_product_types(self) -> dict:
        return self._get("/catalog/machines")

    def get_models(self, product_type: str) -> dict:
        return self._get(f"/catalog/machines/{requests.utils.quote(product_type, safe='')}")

    def list_supplies(self) -> dict:
        return self._get("/catalog/supplies")

    # Assistant endpoints
    def get_greeting(self) -> dict:
        return self._get("/assistant/greeting")

    def send_chat(self, message: str, history: list[dict]) -> dict:
        return self._post("/assistant/chat", {"message": message, "history": history})

    def ask_curiosity(self, history: list[dict]) -> dict:
        return self._post("/assistant/curiosity", {"history": history})

    # Board endpoints
    def list_board_messages(self, limit: int = 100) -> dict:
        return self._get("/board/messages", {"limit": limit})

    def post_board_message(self, text: str) -> dict:
        return self._post("/board/messages", {"text": text})

    # Exchange rate endpoints
    def get_reference_rate(self) -> dict:
        return self._get("/exchange-rate/reference")

    def set_reference_rate(self, rate: float) -> dict:
        return self._put("/exchange-rate/reference", {"rate": rate})

    def get_rate_history(self, limit: int = 20) -> dict:
        return self._get("/exchange-rate/history", {"limit": limit})

    def get_live_rate(self) -> dict:
        return self._get("/exchange-rate/live")

    # Order endpoints
    def next_order_number(self) -> dict:
        return self._post("/orders/next-number")

    def create_order(self, order: dict) -> dict:
        return self._post("/orders", order)

    def list_orders(self) -> dict:
        return self._get("/orders")

    def delete_order(self, order_id: str) -> dict:
        return self._delete(f"/orders/{order_id}")

    def delete_all_orders(self) -> dict:
        return self._delete("/orders")

    def get_order_pdf(self, order_id: str) -> dict:
        """PDF bytes of a saved order in ``data``."""
        return self._request("GET", f"/orders/{order_id}/pdf", raw=True)


def error_message(result: dict, default: str) -> str:
    """Best error text for a failed call."""
    if result.get("error"):
        return result["error"]
    data = result.get("data")
    if isinstance(data, dict):
        detail = data.get("detail")
        if isinstance(detail, str):
            return detail
        if isinstance(detail, list) and detail:
            # FastAPI validation errors
            return detail[0].get("msg", default)
    return default
