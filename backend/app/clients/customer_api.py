"""
CustomerBook Backend — Customer API Client
============================================

What:  Async HTTP client for the /customers JSON API.
Why:   The browser UI views talk to the API exactly like any other client:
       over HTTP, with JSON bodies and status codes.
How:   Wraps an httpx.AsyncClient. 404 becomes None/False (the not-found
       signal); every other failure, including timeouts and connection
       errors, becomes ApiClientError.
Who:   Used by CustomerListView and CustomerDetailView.

Transport:
    With API_BASE_URL unset, `build_api_client` routes requests in-process
    through httpx.ASGITransport to the same FastAPI app. With it set, the
    views call a remote API host.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional
from urllib.parse import quote

import httpx

from app.config import settings
from app.exceptions import ApiClientError

logger = logging.getLogger(__name__)

CUSTOMERS_PATH = "/customers"
IN_PROCESS_BASE_URL = "http://customerbook.internal"


def customer_path(customer_id: str) -> str:
    """`/customers/<id>` with the id escaped as a single path segment."""
    return f"{CUSTOMERS_PATH}/{quote(str(customer_id), safe='')}"


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return fallback


class CustomerApiClient:
    """Typed wrapper around the customer endpoints."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def _request(
        self,
        method: str,
        url: str,
        failure_message: str,
        json: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        try:
            return await self._http.request(method, url, json=json)
        except httpx.TimeoutException as e:
            logger.error("%s %s timed out: %s", method, url, str(e))
            raise ApiClientError(message=f"{failure_message} (request timed out)")
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, url, str(e))
            raise ApiClientError(message=failure_message, context={"error_type": type(e).__name__})

    def _raise_for_status(self, response: httpx.Response, failure_message: str) -> None:
        if response.is_success:
            return
        raise ApiClientError(
            message=_error_message(response, failure_message),
            status_code=response.status_code,
        )

    async def list_customers(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", CUSTOMERS_PATH, "Failed to fetch customers")
        self._raise_for_status(response, "Failed to fetch customers")
        return response.json()

    async def get_customer(self, customer_id: str) -> Optional[Dict[str, Any]]:
        """Returns the customer, or None when the API answers 404."""
        response = await self._request(
            "GET", customer_path(customer_id), "Failed to fetch customer"
        )
        if response.status_code == 404:
            return None
        self._raise_for_status(response, "Failed to fetch customer")
        return response.json()

    async def create_customer(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        response = await self._request(
            "POST", CUSTOMERS_PATH, "Failed to create customer", json=fields
        )
        self._raise_for_status(response, "Failed to create customer")
        return response.json()

    async def update_customer(
        self, customer_id: str, fields: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        response = await self._request(
            "PUT", customer_path(customer_id), "Failed to update customer", json=fields
        )
        if response.status_code == 404:
            return None
        self._raise_for_status(response, "Failed to update customer")
        return response.json()

    async def delete_customer(self, customer_id: str) -> bool:
        response = await self._request(
            "DELETE", customer_path(customer_id), "Failed to delete customer"
        )
        if response.status_code == 404:
            return False
        self._raise_for_status(response, "Failed to delete customer")
        return True


@asynccontextmanager
async def build_api_client(
    app: Any = None, request_id: Optional[str] = None
) -> AsyncIterator[CustomerApiClient]:
    """
    Open a CustomerApiClient for the duration of one page request.

    Args:
        app: ASGI app to call in-process when API_BASE_URL is unset
        request_id: forwarded as X-Request-ID so API log lines share the
                    page request's correlation id
    """
    headers = {"X-Request-ID": request_id} if request_id else {}
    timeout = httpx.Timeout(settings.api_timeout_seconds)

    if settings.api_base_url:
        http = httpx.AsyncClient(
            base_url=settings.api_base_url, headers=headers, timeout=timeout
        )
    else:
        if app is None:
            raise ValueError("An ASGI app is required when API_BASE_URL is not set")
        http = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url=IN_PROCESS_BASE_URL,
            headers=headers,
            timeout=timeout,
        )

    async with http:
        yield CustomerApiClient(http)
