"""
ResponseDecoder module for validating and parsing Shopify Admin API responses
"""

import json
from typing import Dict, Any, List, Optional
from urllib.parse import urlparse, parse_qs

from requests.utils import parse_header_links

from shopify_adapter.http_client import APIResponse


class ApiError(Exception):
    """Raised when the API answers with an error status code"""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Shopify API request failed with status {status_code}: {body}")


class DecodeError(Exception):
    """Raised when a response body is malformed or has an unexpected shape"""
    pass


class NotFoundError(Exception):
    """Raised when a well-formed response lacks the expected entity envelope"""
    pass


class ResponseDecoder:
    """Turns raw API responses into plain mappings"""

    def decode(self, response: APIResponse) -> Dict[str, Any]:
        """
        Validate status and parse the JSON body

        Args:
            response: Raw APIResponse

        Returns:
            Decoded mapping, empty when the body is blank

        Raises:
            ApiError: If status code is 400 or above
            DecodeError: If the body is not a JSON object
        """
        if response.status_code >= 400:
            raise ApiError(response.status_code, response.text if response.text else "Unknown error")

        if not response.text or not response.text.strip():
            return {}

        try:
            data = json.loads(response.text)
        except ValueError as e:
            raise DecodeError(f"Malformed JSON in response body: {e}")

        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")

        return data

    def extract_object(self, data: Dict[str, Any], key: str,
                       entity_id: Optional[Any] = None) -> Dict[str, Any]:
        """
        Pull a single enveloped entity out of a decoded response

        Args:
            data: Decoded response mapping
            key: Envelope key (e.g. 'customer')
            entity_id: Identifier used in the not-found message

        Returns:
            The enveloped mapping

        Raises:
            NotFoundError: If the envelope key is absent or null
            DecodeError: If the envelope does not hold an object
        """
        entity_data = data.get(key)
        if entity_data is None:
            label = key.capitalize()
            raise NotFoundError(f"{label} not found: {entity_id}" if entity_id is not None
                                else f"{label} not found in response")

        if not isinstance(entity_data, dict):
            raise DecodeError(f"Expected '{key}' to be an object, got {type(entity_data).__name__}")

        return entity_data

    def extract_list(self, data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
        """
        Pull an enveloped entity list out of a decoded response

        An absent envelope key means an empty result.

        Raises:
            DecodeError: If the envelope holds something other than a list of objects
        """
        items = data.get(key)
        if items is None:
            return []

        if not isinstance(items, list):
            raise DecodeError(f"Expected '{key}' to be a list, got {type(items).__name__}")

        for item in items:
            if not isinstance(item, dict):
                raise DecodeError(f"Expected every '{key}' element to be an object")

        return items

    def require_delete_success(self, response: APIResponse) -> None:
        """
        DELETE endpoints answer 200 with a possibly empty body on success

        Raises:
            ApiError: If status is anything other than 200
        """
        if response.status_code != 200:
            raise ApiError(response.status_code, response.text if response.text else "Unknown error")

    def extract_next_page_info(self, headers: Dict[str, str]) -> Optional[str]:
        """
        Read the cursor for the next page from the Link header

        Args:
            headers: Response headers

        Returns:
            page_info value of the rel="next" link, or None on the last page
        """
        link_header = None
        for name, value in headers.items():
            if name.lower() == 'link':
                link_header = value
                break

        if not link_header:
            return None

        for link in parse_header_links(link_header):
            if link.get('rel') != 'next':
                continue
            query = parse_qs(urlparse(link.get('url', '')).query)
            page_info = query.get('page_info')
            if page_info:
                return page_info[0]

        return None
