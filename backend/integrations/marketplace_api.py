import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from business_hours.schedule import DaySchedule

from .exceptions import ApiError, DecodeError, NetworkFailure
from .session import ApiSession

logger = logging.getLogger(__name__)


class MarketplaceAPIClient:
    """
    Thin wrapper over the marketplace REST API.

    Every method takes the ApiSession to act under and returns the decoded
    JSON body. Mapping payloads onto domain records is left to
    integrations.decoders.
    """

    def _make_request(
        self,
        session: ApiSession,
        method: str,
        path: str,
        data: Any = None,
        params: Dict[str, Any] = None,
    ) -> Any:
        """Make an API request and classify failures."""
        url = f"{session.base_url}/{path.lstrip('/')}"

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=session.headers(),
                json=data,
                params=params,
                timeout=session.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Marketplace API request failed: {method} {url} - {e}")
            raise NetworkFailure(method, url, str(e)) from e

        if response.status_code >= 500:
            logger.error(f"Marketplace API server error: {method} {url} - {response.status_code}")
            raise NetworkFailure(method, url, f"server error {response.status_code}", response.status_code)

        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {"detail": response.text}
            logger.error(f"Marketplace API rejected {method} {url} - {response.status_code}: {payload}")
            raise ApiError(response.status_code, payload)

        if response.status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError("body", response.text, f"{method} {url} returned a non-JSON body") from e

    # Auth

    def obtain_token(self, session: ApiSession, email: str, password: str) -> ApiSession:
        """Log in and return a session carrying the token and the user's ids."""
        payload = self._make_request(
            session, "POST", "auth/token/", {"email": email, "password": password}
        )
        if "access" not in payload:
            raise DecodeError("access", payload)

        user = payload.get("user") or {}
        client_id = user.get("id") if user.get("role") == "CLIENT" else None
        return session.with_token(
            payload["access"],
            client_id=client_id,
            establishment_id=user.get("establishment"),
        )

    # Establishments

    def list_establishments(self, session: ApiSession) -> List[Dict[str, Any]]:
        return self._make_request(session, "GET", "establishments/")

    def get_establishment(self, session: ApiSession, establishment_id: Optional[int] = None) -> Dict[str, Any]:
        if establishment_id is None:
            establishment_id = session.require_establishment()
        return self._make_request(session, "GET", f"establishments/{establishment_id}/")

    def get_establishment_status(self, session: ApiSession, establishment_id: int) -> Dict[str, Any]:
        return self._make_request(session, "GET", f"establishments/{establishment_id}/status/")

    def get_catalog(self, session: ApiSession, establishment_id: int, **filters) -> List[Dict[str, Any]]:
        return self._make_request(session, "GET", f"establishments/{establishment_id}/catalog/", params=filters)

    def save_business_hours(self, session: ApiSession, days: Iterable[DaySchedule]) -> List[Dict[str, Any]]:
        """Replace the session establishment's week with ``days``."""
        establishment_id = session.require_establishment()
        body = [
            {
                "dia": day.weekday,
                "fechado": day.closed,
                "horario_abertura": day.open_time,
                "horario_fechamento": day.close_time,
            }
            for day in days
        ]
        return self._make_request(session, "PATCH", f"establishments/{establishment_id}/hours/", body)

    # Cart

    def get_cart(self, session: ApiSession) -> Dict[str, Any]:
        return self._make_request(session, "GET", f"cart/{session.require_client()}/")

    def add_cart_item(self, session: ApiSession, catalog_item_id: int, quantity: int = 1) -> Dict[str, Any]:
        return self._make_request(
            session,
            "POST",
            f"cart/{session.require_client()}/items/",
            {"catalogo_produto_id": catalog_item_id, "quantidade": quantity},
        )

    def update_cart_item(self, session: ApiSession, item_id: int, quantity: int) -> Dict[str, Any]:
        return self._make_request(
            session,
            "PATCH",
            f"cart/{session.require_client()}/items/{item_id}/",
            {"quantidade": quantity},
        )

    def remove_cart_item(self, session: ApiSession, item_id: int) -> Dict[str, Any]:
        return self._make_request(session, "DELETE", f"cart/{session.require_client()}/items/{item_id}/")

    def clear_cart(self, session: ApiSession) -> Dict[str, Any]:
        return self._make_request(session, "DELETE", f"cart/{session.require_client()}/")

    # Orders

    def create_order(
        self,
        session: ApiSession,
        cart_id: int,
        address_id: int,
        payment_method_id: int,
        notes: str = "",
    ) -> Dict[str, Any]:
        return self._make_request(
            session,
            "POST",
            "orders/",
            {
                "carrinho_id": cart_id,
                "endereco_id": address_id,
                "forma_pagamento_id": payment_method_id,
                "observacoes": notes,
            },
        )

    def get_order(self, session: ApiSession, order_id: int) -> Dict[str, Any]:
        return self._make_request(session, "GET", f"orders/{order_id}/")

    def get_establishment_orders(self, session: ApiSession, status: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"status": status} if status else None
        return self._make_request(
            session, "GET", f"orders/establishment/{session.require_establishment()}/", params=params
        )

    def get_dashboard(self, session: ApiSession) -> Dict[str, Any]:
        return self._make_request(
            session, "GET", f"orders/establishment/{session.require_establishment()}/dashboard/"
        )

    def get_client_orders(self, session: ApiSession) -> List[Dict[str, Any]]:
        return self._make_request(session, "GET", f"orders/client/{session.require_client()}/")

    def update_order_status(self, session: ApiSession, order_id: int, status: str) -> Dict[str, Any]:
        return self._make_request(session, "PUT", f"orders/{order_id}/", {"status": status})

    # Payments

    def list_payment_methods(self, session: ApiSession) -> List[Dict[str, Any]]:
        return self._make_request(session, "GET", "payments/methods/")
