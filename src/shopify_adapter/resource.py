"""
ShopifyResource module implementing list/get/create/update/delete for any Admin API entity
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from shopify_adapter.config_loader import resolve
from shopify_adapter.http_client import RequestBuilder, HTTPClient, APIResponse
from shopify_adapter.rate_limiter import RateLimiter
from shopify_adapter.response_decoder import ResponseDecoder
from shopify_adapter.entity_mapper import from_mapping, from_mappings
from shopify_adapter.query_filters import QueryFilterSet
from shopify_adapter.fetch_policy import FetchType, ListResult, EntityStore, apply_fetch_policy


@dataclass(frozen=True)
class EntitySchema:
    """Describes where an entity lives in the API and how it is enveloped"""
    entity_cls: Type[Any]
    singular: str
    plural: str

    @property
    def collection_path(self) -> str:
        return f"/{self.plural}.json"

    def member_path(self, entity_id: Any) -> str:
        return f"/{self.plural}/{entity_id}.json"


@dataclass(frozen=True)
class DeleteResult:
    id: Any
    deleted: bool


class ShopifyResource:
    """
    CRUD operations for one entity type

    Every call is a single outbound request: build the request, wait on the
    rate limiter, send, decode, then map onto the schema's entity class.
    """

    def __init__(self, schema: EntitySchema, request_builder: RequestBuilder,
                 http_client: HTTPClient, rate_limiter: RateLimiter,
                 decoder: Optional[ResponseDecoder] = None,
                 store: Optional[EntityStore] = None):
        self.schema = schema
        self.request_builder = request_builder
        self.http_client = http_client
        self.rate_limiter = rate_limiter
        self.decoder = decoder or ResponseDecoder()
        self.store = store

        self.logger = logging.getLogger(__name__)

    def list(self, filters: Optional[QueryFilterSet] = None,
             fetch_type: FetchType = FetchType.FETCH) -> ListResult:
        """
        List entities matching the filters and shape the output

        Args:
            filters: Optional query filters
            fetch_type: Output shape (FETCH, FETCH_ONE, STORE)

        Returns:
            ListResult; next_page_info carries the cursor for the following page
        """
        fetch_type = FetchType.parse(fetch_type)
        filters = filters or QueryFilterSet()
        path = filters.apply_to_path(self.schema.collection_path)

        response = self._execute("GET", path)
        data = self.decoder.decode(response)
        entities = from_mappings(self.schema.entity_cls,
                                 self.decoder.extract_list(data, self.schema.plural))

        self.logger.info(f"Retrieved {len(entities)} {self.schema.plural} from Shopify")

        result = apply_fetch_policy(entities, fetch_type, store=self.store, name=self.schema.plural)
        result.next_page_info = self.decoder.extract_next_page_info(response.headers)
        return result

    def get(self, entity_id: Any) -> Any:
        """
        Retrieve one entity by id

        Raises:
            ConfigurationError: If entity_id is missing
            NotFoundError: If the response carries no entity envelope
        """
        entity_id = resolve(entity_id, f"{self.schema.singular}_id")

        response = self._execute("GET", self.schema.member_path(entity_id))
        data = self.decoder.decode(response)
        entity = from_mapping(self.schema.entity_cls,
                              self.decoder.extract_object(data, self.schema.singular, entity_id))

        self.logger.info(f"Retrieved {self.schema.singular} {entity_id} from Shopify")
        return entity

    def create(self, payload: Dict[str, Any]) -> Any:
        """Create an entity from a wire-format payload and return the server's copy"""
        response = self._execute("POST", self.schema.collection_path, {self.schema.singular: payload})
        data = self.decoder.decode(response)
        entity = from_mapping(self.schema.entity_cls,
                              self.decoder.extract_object(data, self.schema.singular))

        self.logger.info(f"Created {self.schema.singular} with ID: {getattr(entity, 'id', None)}")
        return entity

    def update(self, entity_id: Any, payload: Dict[str, Any]) -> Any:
        """Update the given fields of an entity and return the server's copy"""
        entity_id = resolve(entity_id, f"{self.schema.singular}_id")

        body = {self.schema.singular: {'id': entity_id, **payload}}
        response = self._execute("PUT", self.schema.member_path(entity_id), body)
        data = self.decoder.decode(response)
        entity = from_mapping(self.schema.entity_cls,
                              self.decoder.extract_object(data, self.schema.singular, entity_id))

        self.logger.info(f"Updated {self.schema.singular} {entity_id}")
        return entity

    def delete(self, entity_id: Any) -> DeleteResult:
        """
        Delete an entity

        Raises:
            ApiError: Unless the API answers exactly 200
        """
        entity_id = resolve(entity_id, f"{self.schema.singular}_id")

        response = self._execute("DELETE", self.schema.member_path(entity_id))
        self.decoder.require_delete_success(response)

        self.logger.info(f"Successfully deleted {self.schema.singular} (ID: {entity_id}) from Shopify")
        return DeleteResult(id=entity_id, deleted=True)

    def _execute(self, method: str, path: str, body: Optional[Any] = None) -> APIResponse:
        request = self.request_builder.build_request(method, path, body)
        self.logger.debug(f"{method} {self.schema.plural} via Shopify API: {request.url}")

        self.rate_limiter.wait()
        return self.http_client.send(request)
