"""
Prefect Orchestration for the Shopify Admin REST adapter
Wraps the customer, order and product operations as Prefect tasks and runs change detection as a scheduled flow

python -m shopify_adapter.prefect_shopify_tasks --config configs/shopify.toml --entity orders --list --fetch-type FETCH --limit 50
python -m shopify_adapter.prefect_shopify_tasks --config configs/shopify.toml --entity orders --serve
"""

import sys
import argparse
import traceback
from pathlib import Path
from typing import Dict, List, Any, Optional, Tuple
from datetime import timedelta

# Prefect imports
from prefect import flow, task, get_run_logger

from shopify_adapter.config_loader import ConfigLoader, ConfigurationError, ShopifyConfig, trigger_setting
from shopify_adapter.client import ShopifyClient
from shopify_adapter.database_manager import DatabaseManager
from shopify_adapter.state_manager import StateManager
from shopify_adapter.entity_mapper import to_mapping
from shopify_adapter.fetch_policy import FetchType, ListResult
from shopify_adapter.query_filters import QueryFilterSet
from shopify_adapter.poller import (
    ChangeDetectionPoller,
    TriggerEvent,
    DEFAULT_INTERVAL,
    DEFAULT_LOOKBACK,
    DEFAULT_MAX_RESULTS,
    order_created_poller,
    customer_created_poller,
    product_created_poller,
)

ENTITY_NAMES = ('customers', 'orders', 'products')

POLLER_FACTORIES = {
    'customers': customer_created_poller,
    'orders': order_created_poller,
    'products': product_created_poller,
}


# ===================================================================
# HELPERS - Pure construction and output shaping, shared by tasks and CLI
# ===================================================================

def validate_entity_name(entity: str) -> str:
    """
    Normalise an entity name given on the command line or as a flow parameter

    Raises:
        ConfigurationError: If the name is not customers, orders or products
    """
    name = (entity or "").strip().lower()
    if name not in ENTITY_NAMES:
        raise ConfigurationError(f"Unsupported entity '{entity}'. Expected one of: {', '.join(ENTITY_NAMES)}")
    return name


def list_result_to_output(result: ListResult) -> Dict[str, Any]:
    output = {
        'count': result.count,
        'entities': [to_mapping(entity) for entity in result.entities],
    }
    if result.uri is not None:
        output['uri'] = result.uri
    if result.next_page_info is not None:
        output['next_page_info'] = result.next_page_info
    return output


def trigger_event_to_output(event: TriggerEvent) -> Dict[str, Any]:
    return {
        'count': event.count,
        'entities': [to_mapping(entity) for entity in event.entities],
        'first': to_mapping(event.first),
        'watermark': event.watermark.isoformat(),
    }


def open_state_manager(config: ShopifyConfig) -> Tuple[DatabaseManager, StateManager]:
    """
    Open the trigger state database and make sure its schema exists

    Returns:
        (database_manager, state_manager); the caller closes the database manager
    """
    db_manager = DatabaseManager()
    db_manager.create_connection(Path(config.state_db_path))
    db_manager.create_tables()
    return db_manager, StateManager(db_manager)


def trigger_interval(config: ShopifyConfig) -> timedelta:
    interval_minutes = trigger_setting(config, 'interval_minutes')
    if interval_minutes is None:
        return DEFAULT_INTERVAL
    return timedelta(minutes=float(interval_minutes))


def build_poller(config: ShopifyConfig, client: ShopifyClient, entity: str,
                 state_manager: Optional[StateManager] = None) -> ChangeDetectionPoller:
    """
    Build a change-detection poller from the [trigger] configuration section

    Order status filters only apply to the orders poller.

    Args:
        config: Loaded adapter configuration
        client: Client whose resource the poller lists
        entity: 'customers', 'orders' or 'products'
        state_manager: Watermark persistence; None keeps the watermark in memory

    Returns:
        Configured ChangeDetectionPoller
    """
    entity = validate_entity_name(entity)

    lookback_minutes = trigger_setting(config, 'lookback_minutes')

    settings = {
        'interval': trigger_interval(config),
        'lookback': timedelta(minutes=float(lookback_minutes)) if lookback_minutes is not None else DEFAULT_LOOKBACK,
        'max_results': int(trigger_setting(config, 'max_results', DEFAULT_MAX_RESULTS)),
    }
    if entity == 'orders':
        settings['financial_status'] = trigger_setting(config, 'financial_status')
        settings['fulfillment_status'] = trigger_setting(config, 'fulfillment_status')

    return POLLER_FACTORIES[entity](client, state_manager=state_manager, **settings)


# ===================================================================
# PREFECT TASKS - Individual operations converted to tasks
# ===================================================================

@task(
    name="validate_shopify_configuration",
    description="Validate configuration file and access token environment variable",
    retries=0  # Configuration validation should not retry
)
def validate_configuration(config_path: str) -> Dict[str, Any]:
    """
    Validate configuration and the access token environment variable

    Args:
        config_path: Path to TOML or YAML configuration file

    Returns:
        Validation results and config summary
    """
    logger = get_run_logger()
    logger.info(f"Validating configuration: {config_path}")

    try:
        config = ConfigLoader.load_config(Path(config_path))
    except ConfigurationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise

    logger.info("Configuration and environment validation passed")
    return {
        'status': 'valid',
        'config_summary': {
            'store_domain': config.store_domain,
            'api_version': config.api_version,
            'rate_limit_delay': config.rate_limit_delay,
            'storage_directory': config.storage_directory,
        }
    }


@task(
    name="list_shopify_entities",
    description="List customers, orders or products with optional filters",
    retries=0
)
def list_entities(config_path: str, entity: str,
                  filters: Optional[Dict[str, Any]] = None,
                  fetch_type: str = "FETCH") -> Dict[str, Any]:
    """
    List entities of one type

    Args:
        config_path: Path to configuration file
        entity: 'customers', 'orders' or 'products'
        filters: Query filter values keyed by parameter name (limit, status, created_at_min, ...)
        fetch_type: FETCH, FETCH_ONE or STORE

    Returns:
        Output with count, entities and, for STORE, the uri of the stored file
    """
    logger = get_run_logger()
    entity = validate_entity_name(entity)
    config = ConfigLoader.load_config(Path(config_path))

    with ShopifyClient(config) as client:
        result = client.resource(entity).list(QueryFilterSet.from_mapping(filters), FetchType.parse(fetch_type))

    logger.info(f"Listed {result.count} {entity} ({FetchType.parse(fetch_type).name})")
    return list_result_to_output(result)


@task(
    name="get_shopify_entity",
    description="Retrieve one customer, order or product by id",
    retries=0
)
def get_entity(config_path: str, entity: str, entity_id: Any) -> Dict[str, Any]:
    logger = get_run_logger()
    entity = validate_entity_name(entity)
    config = ConfigLoader.load_config(Path(config_path))

    with ShopifyClient(config) as client:
        result = client.resource(entity).get(entity_id)

    logger.info(f"Retrieved {entity} {entity_id}")
    return to_mapping(result)


@task(
    name="create_shopify_entity",
    description="Create a customer, order or product",
    retries=0  # Creation is not idempotent
)
def create_entity(config_path: str, entity: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create an entity from a payload built by the matching build_*_payload helper

    Returns:
        The created entity as returned by Shopify
    """
    logger = get_run_logger()
    entity = validate_entity_name(entity)
    config = ConfigLoader.load_config(Path(config_path))

    with ShopifyClient(config) as client:
        result = client.resource(entity).create(payload)

    logger.info(f"Created {entity} with ID: {result.id}")
    return to_mapping(result)


@task(
    name="update_shopify_entity",
    description="Update fields of a customer, order or product",
    retries=0
)
def update_entity(config_path: str, entity: str, entity_id: Any,
                  payload: Dict[str, Any]) -> Dict[str, Any]:
    logger = get_run_logger()
    entity = validate_entity_name(entity)
    config = ConfigLoader.load_config(Path(config_path))

    with ShopifyClient(config) as client:
        result = client.resource(entity).update(entity_id, payload)

    logger.info(f"Updated {entity} {entity_id}")
    return to_mapping(result)


@task(
    name="delete_shopify_entity",
    description="Delete a customer, order or product",
    retries=0
)
def delete_entity(config_path: str, entity: str, entity_id: Any) -> Dict[str, Any]:
    logger = get_run_logger()
    entity = validate_entity_name(entity)
    config = ConfigLoader.load_config(Path(config_path))

    with ShopifyClient(config) as client:
        result = client.resource(entity).delete(entity_id)

    logger.info(f"Deleted {entity} {result.id}")
    return {'id': result.id, 'deleted': result.deleted}


@task(
    name="poll_for_new_shopify_entities",
    description="Run one change-detection cycle against the persisted watermark",
    retries=0  # A failed cycle is retried by the next scheduled run
)
def poll_for_new_entities(config_path: str, entity: str) -> Optional[Dict[str, Any]]:
    """
    Run one polling cycle for newly created entities

    Args:
        config_path: Path to configuration file
        entity: 'customers', 'orders' or 'products'

    Returns:
        Trigger output (count, entities, first, watermark), or None when nothing new was found
    """
    logger = get_run_logger()
    config = ConfigLoader.load_config(Path(config_path))

    db_manager, state_manager = open_state_manager(config)
    try:
        with ShopifyClient(config) as client:
            poller = build_poller(config, client, entity, state_manager)
            event = poller.evaluate()
    finally:
        db_manager.close_connection()

    if event is None:
        logger.info(f"No new {entity} since last poll")
        return None

    logger.info(f"Detected {event.count} new {entity}; watermark advanced to {event.watermark.isoformat()}")
    return trigger_event_to_output(event)


# ===================================================================
# PREFECT FLOWS - Workflow orchestration
# ===================================================================

@flow(
    name="shopify-list",
    description="List Shopify customers, orders or products",
    version="1.0.0",
    log_prints=True
)
def shopify_list_flow(config_path: str, entity: str, fetch_type: str = "FETCH",
                      limit: Optional[int] = None,
                      filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    List entities after validating configuration

    Args:
        config_path: Path to configuration file
        entity: 'customers', 'orders' or 'products'
        fetch_type: FETCH, FETCH_ONE or STORE
        limit: Page size; clamped to 1..250
        filters: Additional query filter values

    Returns:
        List output
    """
    logger = get_run_logger()
    logger.info(f"Starting Shopify list flow for {entity}")

    validate_configuration(config_path)

    query = dict(filters or {})
    if limit is not None:
        query['limit'] = limit

    return list_entities(config_path, entity, query, fetch_type)


@flow(
    name="shopify-trigger",
    description="Detect newly created Shopify customers, orders or products",
    version="1.0.0",
    log_prints=True
)
def shopify_trigger_flow(config_path: str, entity: str = "orders") -> Optional[Dict[str, Any]]:
    """
    One scheduled change-detection cycle

    Failures propagate so the flow run is marked failed; the stored
    watermark is left unchanged and the next run retries the same window.
    """
    logger = get_run_logger()
    logger.info(f"Checking for new Shopify {entity}")
    return poll_for_new_entities(config_path, entity)


# ===================================================================
# UTILITY FUNCTIONS
# ===================================================================

def serve_trigger(config_path: str, entity: str = "orders"):
    """Serve the trigger flow on the configured polling interval"""
    entity = validate_entity_name(entity)
    config = ConfigLoader.load_config(Path(config_path))
    with ShopifyClient(config) as client:
        interval = build_poller(config, client, entity).interval

    print(f"Serving Shopify {entity} trigger every {interval.total_seconds() / 60:.1f} minutes")
    print("Dashboard available at: http://127.0.0.1:4200")

    shopify_trigger_flow.serve(
        name=f"shopify-{entity}-created-trigger",
        tags=["shopify", "trigger"],
        description=f"Polls Shopify for newly created {entity}",
        version="1.0.0",
        interval=interval,
        parameters={'config_path': config_path, 'entity': entity}
    )


def print_entities(entities: List[Dict[str, Any]], limit: int = 10) -> None:
    for entity in entities[:limit]:
        print(f"  {entity.get('id')}: {entity.get('email') or entity.get('name') or entity.get('title') or ''}")
    if len(entities) > limit:
        print(f"  ... and {len(entities) - limit} more")


# ===================================================================
# COMMAND LINE INTERFACE
# ===================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Shopify Admin REST adapter for Prefect",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate configuration only
  python -m shopify_adapter.prefect_shopify_tasks --config configs/shopify.toml --validate-only

  # List the 50 most recent orders
  python -m shopify_adapter.prefect_shopify_tasks --config configs/shopify.toml --entity orders --list --limit 50

  # Store every product of one page as a JSON Lines file
  python -m shopify_adapter.prefect_shopify_tasks --config configs/shopify.toml --entity products --list --fetch-type STORE

  # Run a single change-detection cycle
  python -m shopify_adapter.prefect_shopify_tasks --config configs/shopify.toml --entity orders --poll

  # Serve the trigger flow on its polling interval
  python -m shopify_adapter.prefect_shopify_tasks --config configs/shopify.toml --entity orders --serve
        """
    )

    parser.add_argument("--config", help="Path to TOML or YAML configuration file")
    parser.add_argument("--entity", default="orders", choices=ENTITY_NAMES, help="Entity type to operate on")
    parser.add_argument("--list", action="store_true", help="List entities")
    parser.add_argument("--fetch-type", default="FETCH", help="FETCH, FETCH_ONE or STORE")
    parser.add_argument("--limit", type=int, help="Page size for --list (1-250)")
    parser.add_argument("--poll", action="store_true", help="Run one change-detection cycle")
    parser.add_argument("--serve", action="store_true", help="Serve the trigger flow on its polling interval")
    parser.add_argument("--validate-only", action="store_true", help="Only validate configuration")
    parser.add_argument("--verbose", action="store_true", help="Print tracebacks on failure")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function with CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configuration required for every operation
    if not args.config:
        print("--config is required")
        parser.print_help()
        return 1

    try:
        if args.validate_only:
            print("Validating configuration and environment...")
            result = validate_configuration(args.config)
            summary = result['config_summary']
            print("Configuration validation passed!")
            print(f"Store: {summary['store_domain']}")
            print(f"API version: {summary['api_version']}")
            print(f"Rate limit delay: {summary['rate_limit_delay']}s")
            return 0

        elif args.serve:
            serve_trigger(args.config, args.entity)
            return 0

        elif args.poll:
            result = shopify_trigger_flow(config_path=args.config, entity=args.entity)
            if result is None:
                print(f"No new {args.entity} found")
            else:
                print(f"Found {result['count']} new {args.entity}; watermark {result['watermark']}")
                print_entities(result['entities'])
            return 0

        elif args.list:
            result = shopify_list_flow(
                config_path=args.config,
                entity=args.entity,
                fetch_type=args.fetch_type,
                limit=args.limit
            )
            print(f"Count: {result['count']}")
            if 'uri' in result:
                print(f"Stored at: {result['uri']}")
            print_entities(result['entities'])
            if 'next_page_info' in result:
                print(f"Next page cursor: {result['next_page_info']}")
            return 0

        else:
            parser.print_help()
            return 1

    except Exception as e:
        print(f"\nExecution failed: {e}")
        if args.verbose:
            print(f"Traceback: {traceback.format_exc()}")
        return 1


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
