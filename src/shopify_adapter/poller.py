"""
ChangeDetectionPoller module for detecting newly created entities between polling cycles

Each cycle lists entities created since the stored watermark. When at least
one entity comes back the poller emits a TriggerEvent and advances the
watermark to the newest created_at seen. A batch without any created_at
advances the watermark to the current time. Empty cycles and failed cycles
leave the watermark where it was, so a failed window is retried next cycle.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from shopify_adapter.fetch_policy import FetchType
from shopify_adapter.query_filters import QueryFilterSet
from shopify_adapter.resource import ShopifyResource
from shopify_adapter.state_manager import StateManager

DEFAULT_INTERVAL = timedelta(minutes=5)
DEFAULT_LOOKBACK = timedelta(minutes=10)
DEFAULT_MAX_RESULTS = 10


class PollerState(Enum):
    IDLE = "IDLE"
    POLLING = "POLLING"


@dataclass
class TriggerEvent:
    """Batch of newly detected entities emitted by one polling cycle"""
    entities: List[Any]
    count: int
    first: Any
    watermark: datetime


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def compute_next_watermark(current: Optional[datetime], entities: List[Any],
                           fallback: Optional[datetime] = None) -> Optional[datetime]:
    """
    Advance a watermark to the newest created_at among entities

    Entities without created_at are ignored. The result is never earlier
    than the current watermark.

    Args:
        current: Watermark before this cycle
        entities: Entities returned by the cycle
        fallback: Used in place of the newest timestamp when no entity carries one

    Returns:
        The new watermark; the current one when no entity carries a timestamp and no fallback is given
    """
    timestamps = [
        _as_aware(entity.created_at)
        for entity in entities
        if getattr(entity, 'created_at', None) is not None
    ]
    if timestamps:
        newest = max(timestamps)
    elif fallback is not None:
        newest = _as_aware(fallback)
    else:
        return current

    if current is None:
        return newest
    return max(_as_aware(current), newest)


class ChangeDetectionPoller:
    """Polls a list operation with a created_at watermark"""

    def __init__(self, resource: ShopifyResource, trigger_id: str,
                 state_manager: Optional[StateManager] = None,
                 interval: timedelta = DEFAULT_INTERVAL,
                 lookback: timedelta = DEFAULT_LOOKBACK,
                 max_results: int = DEFAULT_MAX_RESULTS,
                 financial_status: Optional[str] = None,
                 fulfillment_status: Optional[str] = None,
                 clock: Callable[[], datetime] = _utc_now):
        self.resource = resource
        self.trigger_id = trigger_id
        self.state_manager = state_manager
        self.interval = interval
        self.lookback = lookback
        self.max_results = max_results
        self.financial_status = financial_status
        self.fulfillment_status = fulfillment_status
        self.clock = clock

        self.state = PollerState.IDLE
        self._watermark: Optional[datetime] = None
        self.logger = logging.getLogger(__name__)

    def initial_watermark(self) -> datetime:
        return _as_aware(self.clock()) - self.lookback

    def build_filters(self, watermark: datetime) -> QueryFilterSet:
        return QueryFilterSet(
            created_at_min=watermark,
            financial_status=self.financial_status,
            fulfillment_status=self.fulfillment_status,
            limit=self.max_results
        )

    def poll(self, watermark: Optional[datetime] = None) -> Tuple[Optional[TriggerEvent], datetime]:
        """
        Run one polling cycle from the given watermark

        Args:
            watermark: Lower created_at bound; defaults to now minus the lookback window

        Returns:
            (event, next_watermark); event is None and the watermark unchanged when nothing new was found

        Raises:
            Exception: Any failure of the underlying list call, after logging it
        """
        if watermark is None:
            watermark = self.initial_watermark()
        watermark = _as_aware(watermark)

        self.logger.debug(f"Checking for new Shopify {self.resource.schema.plural} since {watermark.isoformat()}")

        self.state = PollerState.POLLING
        try:
            result = self.resource.list(self.build_filters(watermark), FetchType.FETCH)
        except Exception as e:
            self.logger.error(f"Error checking for new Shopify {self.resource.schema.plural}: {e}")
            raise
        finally:
            self.state = PollerState.IDLE

        if not result.entities:
            self.logger.debug(f"No new {self.resource.schema.plural} found")
            return None, watermark

        # Untimestamped batches advance the watermark to now
        next_watermark = compute_next_watermark(watermark, result.entities, fallback=self.clock())

        for entity in result.entities:
            self.logger.info(f"New {self.resource.schema.singular} detected (ID: {getattr(entity, 'id', None)})")

        event = TriggerEvent(
            entities=result.entities,
            count=result.count,
            first=result.entities[0],
            watermark=next_watermark
        )
        return event, next_watermark

    def evaluate(self) -> Optional[TriggerEvent]:
        """
        Run one cycle against the persisted watermark

        The watermark is only written back when the cycle produced an event.
        """
        if self.state_manager is not None:
            watermark = self.state_manager.load_watermark(self.trigger_id)
        else:
            watermark = self._watermark

        event, next_watermark = self.poll(watermark)

        if event is not None:
            if self.state_manager is not None:
                self.state_manager.save_watermark(self.trigger_id, next_watermark)
            self._watermark = next_watermark

        return event


def order_created_poller(client, state_manager: Optional[StateManager] = None,
                         trigger_id: str = "order_created", **kwargs) -> ChangeDetectionPoller:
    return ChangeDetectionPoller(client.orders, trigger_id, state_manager=state_manager, **kwargs)


def customer_created_poller(client, state_manager: Optional[StateManager] = None,
                            trigger_id: str = "customer_created", **kwargs) -> ChangeDetectionPoller:
    return ChangeDetectionPoller(client.customers, trigger_id, state_manager=state_manager, **kwargs)


def product_created_poller(client, state_manager: Optional[StateManager] = None,
                           trigger_id: str = "product_created", **kwargs) -> ChangeDetectionPoller:
    return ChangeDetectionPoller(client.products, trigger_id, state_manager=state_manager, **kwargs)
