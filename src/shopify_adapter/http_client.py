"""
HTTPClient module for building authenticated Shopify Admin API requests and sending them
"""

import json
import requests
from typing import Dict, Any, Optional
from datetime import datetime, timezone
from dataclasses import dataclass, field

from shopify_adapter.config_loader import resolve, DEFAULT_API_VERSION, DEFAULT_TIMEOUT


class UnsupportedMethodError(Exception):
    """Raised when an HTTP method is unknown or does not fit the body supplied"""
    pass


class TransportError(Exception):
    """Raised when a request cannot be delivered (timeout, connection failure)"""
    pass


@dataclass
class APIRequest:
    """Represents a single fully-addressed API request"""
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


@dataclass
class APIResponse:
    """Raw API response as received from the transport"""
    status_code: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)
    request_timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RequestBuilder:
    """Builds authenticated requests against one store's Admin API"""

    METHODS_WITHOUT_BODY = {"GET", "DELETE"}
    METHODS_WITH_BODY = {"POST", "PUT"}

    def __init__(self, store_domain: str, access_token: str,
                 api_version: str = DEFAULT_API_VERSION):
        self.store_domain = resolve(store_domain, 'store_domain')
        self.access_token = resolve(access_token, 'access_token')
        self.api_version = resolve(api_version, 'api_version', required=False,
                                   default=DEFAULT_API_VERSION)

    def build_url(self, path: str) -> str:
        """
        Compose the absolute Admin API URL for a path

        Args:
            path: Endpoint path, including any query string (e.g. '/orders.json?limit=5')

        Returns:
            URL of the form https://{domain}/admin/api/{version}{path}
        """
        return f"https://{self.store_domain}/admin/api/{self.api_version}{path}"

    def build_headers(self) -> Dict[str, str]:
        return {
            'X-Shopify-Access-Token': self.access_token,
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }

    def build_request(self, method: str, path: str, body: Optional[Any] = None) -> APIRequest:
        """
        Build an authenticated request

        GET and DELETE never carry a body. POST and PUT carry the JSON
        serialised body; a None body means no body is attached.

        Args:
            method: HTTP method
            path: Endpoint path including query string
            body: Optional JSON-serialisable payload

        Returns:
            APIRequest ready to send

        Raises:
            UnsupportedMethodError: If the method is unknown or a body is given to GET/DELETE
        """
        method = method.upper()

        if method in self.METHODS_WITHOUT_BODY:
            if body is not None:
                raise UnsupportedMethodError(f"Unsupported method for request with body: {method}")
            serialised_body = None
        elif method in self.METHODS_WITH_BODY:
            serialised_body = json.dumps(body) if body is not None else None
        else:
            raise UnsupportedMethodError(f"Unsupported HTTP method: {method}")

        return APIRequest(
            url=self.build_url(path),
            method=method,
            headers=self.build_headers(),
            body=serialised_body
        )


class HTTPClient:
    """HTTP transport over a requests session, with a per-request timeout and no retries"""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session

    def send(self, request: APIRequest) -> APIResponse:
        """
        Send a request and return the raw response

        Error status codes are returned as-is; interpreting them is the
        decoder's job.

        Args:
            request: APIRequest to send

        Returns:
            APIResponse with status, body text and headers

        Raises:
            TransportError: On timeout or connection failure
        """
        if self.session is None:
            self.session = requests.Session()

        request_timestamp = datetime.now(timezone.utc)

        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body.encode('utf-8') if request.body is not None else None,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request to {request.url} timed out after {self.timeout}s: {e}")
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {request.url} failed: {e}")

        return APIResponse(
            status_code=response.status_code,
            text=response.text or "",
            headers=dict(response.headers),
            request_timestamp=request_timestamp
        )

    def close_connection(self) -> None:
        """
        Close HTTP session and release resources
        """
        if self.session:
            self.session.close()
            self.session = None
