"""
EntityMapper module for mapping decoded API payloads onto entity dataclasses
"""

from dataclasses import fields, is_dataclass, Field
from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, List, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints

from shopify_adapter.response_decoder import DecodeError

T = TypeVar('T')


@lru_cache(maxsize=None)
def _field_hints(entity_cls: type) -> Dict[str, Any]:
    return get_type_hints(entity_cls)


def _wire_name(entity_field: Field) -> str:
    return entity_field.metadata.get('wire', entity_field.name)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO 8601 timestamp as sent by Shopify

    Raises:
        DecodeError: If the value is not a parseable timestamp
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise DecodeError(f"Expected an ISO 8601 timestamp, got {type(value).__name__}")

    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise DecodeError(f"Invalid timestamp: {value!r}")


def _convert(hint: Any, value: Any) -> Any:
    if value is None:
        return None

    origin = get_origin(hint)

    if origin is Union:
        candidates = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(candidates) == 1:
            return _convert(candidates[0], value)
        return value

    if origin is list:
        if not isinstance(value, list):
            raise DecodeError(f"Expected a list, got {type(value).__name__}")
        args = get_args(hint)
        item_hint = args[0] if args else Any
        return [_convert(item_hint, item) for item in value]

    if isinstance(hint, type) and is_dataclass(hint):
        if not isinstance(value, dict):
            raise DecodeError(f"Expected an object for {hint.__name__}, got {type(value).__name__}")
        return from_mapping(hint, value)

    if hint is datetime:
        return parse_timestamp(value)

    return value


def from_mapping(entity_cls: Type[T], data: Optional[Dict[str, Any]]) -> Optional[T]:
    """
    Map a decoded mapping onto an entity dataclass

    Unknown keys are ignored and missing keys stay None. Nested objects and
    lists of objects are mapped recursively with the same rules.

    Args:
        entity_cls: Target dataclass type
        data: Decoded mapping, or None

    Returns:
        A new entity instance, or None when data is None

    Raises:
        DecodeError: If a nested value has the wrong structural type or a timestamp is invalid
    """
    if data is None:
        return None

    hints = _field_hints(entity_cls)
    kwargs = {}
    for entity_field in fields(entity_cls):
        wire_name = _wire_name(entity_field)
        if wire_name in data:
            kwargs[entity_field.name] = _convert(hints[entity_field.name], data[wire_name])

    return entity_cls(**kwargs)


def from_mappings(entity_cls: Type[T], items: List[Dict[str, Any]]) -> List[T]:
    """Map every decoded mapping in a list, preserving order"""
    return [from_mapping(entity_cls, item) for item in items]


def _serialise(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return to_mapping(value)
    if isinstance(value, list):
        return [_serialise(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialise(item) for key, item in value.items()}
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def to_mapping(entity: Any) -> Dict[str, Any]:
    """
    Convert an entity back to a JSON-ready mapping using wire names

    None fields are omitted and timestamps become ISO 8601 strings.
    """
    result = {}
    for entity_field in fields(entity):
        value = getattr(entity, entity_field.name)
        if value is None:
            continue
        result[_wire_name(entity_field)] = _serialise(value)
    return result
