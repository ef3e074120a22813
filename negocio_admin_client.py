"""Negócio Admin API client.

A thin wrapper around the REST API exposed by ``negocio_admin_api``.
It is meant for scripts and tooling that talk to a running server, for
example nightly exports of the period report or bulk client imports.
The client uses the ``requests`` library internally.

Every high-level method returns a tuple ``(data, error)``.  On success
``error`` is ``None``; on failure ``data`` is ``None`` (or an empty
list for listings) and ``error`` is a dictionary with the keys
``status_code`` and ``message``.  Transport failures carry a
``status_code`` of ``None``.

Example::

    api = NegocioAdminAPI(base_url="http://localhost:8000/api")
    stats, error = api.dashboard_stats()
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]
ListResult = Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]


class NegocioAdminAPI:
    """Client for the Negócio Admin REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API including its prefix, e.g.
                ``http://localhost:8000/api``.
            api_key: Optional token sent as ``Authorization: Bearer <token>``
                (useful behind an authenticating reverse proxy).
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/clients``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request (for POST/PATCH).
        Returns:
            A tuple ``(data, error)``.  Empty responses (``204``) yield
            ``(None, None)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("error") or str(err_json)
                    if err_json.get("details"):
                        message = f"{message}: {err_json['details']}"
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str, params: Dict[str, Any] | None = None) -> ListResult:
        data, error = self._request("GET", path, params=params)
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------
    def list_clients(self) -> ListResult:
        return self._list("/clients")

    def get_client(self, client_id: str) -> Result:
        return self._request("GET", f"/clients/{client_id}")

    def create_client(self, payload: Dict[str, Any]) -> Result:
        """Create a client from camelCase fields (``type``, ``name``, ``document``...)."""
        return self._request("POST", "/clients", json_body=payload)

    def update_client(self, client_id: str, changes: Dict[str, Any]) -> Result:
        return self._request("PATCH", f"/clients/{client_id}", json_body=changes)

    def delete_client(self, client_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"/clients/{client_id}")
        return error is None, error

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    def list_products(self) -> ListResult:
        return self._list("/products")

    def list_suppliers(self) -> ListResult:
        return self._list("/suppliers")

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def list_orders(self) -> ListResult:
        return self._list("/orders")

    def recent_orders(self, limit: Optional[int] = None) -> ListResult:
        params = {"limit": limit} if limit is not None else None
        return self._list("/orders/recent", params=params)

    def get_order(self, order_id: str) -> Result:
        return self._request("GET", f"/orders/{order_id}")

    def create_order(self, order: Dict[str, Any], items: List[Dict[str, Any]]) -> Result:
        """Create an order with its line items.

        Args:
            order: ``clientId``, ``supplierId`` and optionally ``status``,
                ``totalValue`` and ``notes``.
            items: One or more ``{"productId", "quantity", "unitPrice"}``
                entries; ``totalPrice`` is optional.
        """
        return self._request("POST", "/orders", json_body={"order": order, "items": items})

    def update_order(self, order_id: str, changes: Dict[str, Any]) -> Result:
        return self._request("PATCH", f"/orders/{order_id}", json_body=changes)

    def delete_order(self, order_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"/orders/{order_id}")
        return error is None, error

    def order_invoices(self, order_id: str) -> ListResult:
        return self._list(f"/orders/{order_id}/invoices")

    # ------------------------------------------------------------------
    # Deliveries and invoices
    # ------------------------------------------------------------------
    def list_deliveries(self) -> ListResult:
        return self._list("/deliveries")

    def today_deliveries(self) -> ListResult:
        return self._list("/deliveries/today")

    def create_delivery(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/deliveries", json_body=payload)

    def update_delivery(self, delivery_id: str, changes: Dict[str, Any]) -> Result:
        return self._request("PATCH", f"/deliveries/{delivery_id}", json_body=changes)

    def create_invoice(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/invoices", json_body=payload)

    # ------------------------------------------------------------------
    # Dashboard and reports
    # ------------------------------------------------------------------
    def dashboard_stats(self) -> Result:
        return self._request("GET", "/dashboard/stats")

    def report_summary(
        self,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        supplier_id: Optional[str] = None,
    ) -> Result:
        """Fetch the period report; dates are ``YYYY-MM-DD`` strings."""
        params = {
            key: value
            for key, value in {"date_from": date_from, "date_to": date_to, "supplier_id": supplier_id}.items()
            if value is not None
        }
        return self._request("GET", "/reports/summary", params=params or None)
