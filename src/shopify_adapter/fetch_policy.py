"""
FetchPolicy module for shaping list operation output (inline list, first item, or stored file)
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Protocol, Union
from dataclasses import dataclass, field

from shopify_adapter.config_loader import ConfigurationError
from shopify_adapter.entity_mapper import to_mapping

logger = logging.getLogger(__name__)


class FetchType(Enum):
    """How a list operation returns its entities"""
    FETCH = "FETCH"
    FETCH_ONE = "FETCH_ONE"
    STORE = "STORE"

    @classmethod
    def parse(cls, value: Union[str, 'FetchType', None]) -> 'FetchType':
        """
        Accept an enum member or a case-insensitive name, defaulting to FETCH

        Raises:
            ConfigurationError: If the name is not a known fetch type
        """
        if value is None:
            return cls.FETCH
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            valid = ', '.join(member.name for member in cls)
            raise ConfigurationError(f"Unsupported fetch type '{value}'. Expected one of: {valid}")


@dataclass
class ListResult:
    """Output of a list operation"""
    entities: List[Any] = field(default_factory=list)
    count: int = 0
    uri: Optional[str] = None
    next_page_info: Optional[str] = None


class EntityStore(Protocol):
    """Durable destination for STORE fetches"""

    def put_entities(self, name: str, entities: List[Any]) -> str:
        """Persist entities and return a URI referencing them"""
        ...


class FileEntityStore:
    """Writes each STORE result as a single JSON Lines file"""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def put_entities(self, name: str, entities: List[Any]) -> str:
        """
        Write all entities to one new JSON Lines file

        The file is written under a temporary name and renamed once complete.

        Args:
            name: Resource name used as the file prefix (e.g. 'orders')
            entities: Entity dataclasses to serialise

        Returns:
            file:// URI of the written file
        """
        self.directory.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        file_path = self.directory / f"{name}_{timestamp}_{str(uuid.uuid4())[:8]}.jsonl"
        temp_path = file_path.with_suffix('.jsonl.tmp')

        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                for entity in entities:
                    f.write(json.dumps(to_mapping(entity)))
                    f.write('\n')
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise
        temp_path.replace(file_path)

        return file_path.resolve().as_uri()


def apply_fetch_policy(entities: List[Any], fetch_type: FetchType,
                       store: Optional[EntityStore] = None,
                       name: str = "entities") -> ListResult:
    """
    Shape a mapped entity list according to the fetch type

    Args:
        entities: Entities in the order returned by the API
        fetch_type: FETCH, FETCH_ONE or STORE
        store: Destination for STORE results
        name: Resource name passed to the store

    Returns:
        ListResult with inline entities (FETCH, FETCH_ONE) or a storage URI (STORE)

    Raises:
        ConfigurationError: If STORE is requested without a store
    """
    if fetch_type is FetchType.FETCH_ONE:
        if not entities:
            return ListResult(entities=[], count=0)
        return ListResult(entities=[entities[0]], count=1)

    if fetch_type is FetchType.STORE:
        if store is None:
            raise ConfigurationError("fetch type STORE requires an entity store")
        uri = store.put_entities(name, entities)
        logger.info(f"Stored {len(entities)} {name} at {uri}")
        return ListResult(entities=[], count=len(entities), uri=uri)

    return ListResult(entities=list(entities), count=len(entities))
