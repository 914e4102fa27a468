"""Command-line interface for resolving and registering table locations."""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from . import __version__
from .catalog import DataCatalog, get_data_catalog
from .catalog.factory import SUPPORTED_CATALOGS
from .config import CatalogConfig
from .errors import DataCatalogError
from .logging import get_logger, setup_logging
from .models import TableHandle, TableMetadata


def _load_config(args: argparse.Namespace) -> CatalogConfig:
    """Build the catalog config from --config, then apply CLI overrides."""
    if args.config:
        config = CatalogConfig.from_yaml(args.config)
    else:
        config = CatalogConfig()

    overrides = {}
    if args.catalog:
        overrides["type"] = args.catalog
    if args.log_level:
        overrides["logging"] = config.logging.model_copy(update={"level": args.log_level})
    if overrides:
        config = config.model_copy(update=overrides)
    return config


def _emit(args: argparse.Namespace, payload: dict, text: str) -> None:
    if args.json:
        print(json.dumps(payload))
    else:
        print(text)


def resolve_command(
    args: argparse.Namespace, catalog: DataCatalog, config: CatalogConfig
) -> int:
    """Print the storage location of DATABASE.TABLE.

    Returns:
        Exit code (0=success, 1=catalog error)
    """
    location = asyncio.run(
        catalog.get_table_storage_location(
            args.catalog_id or config.catalog_id, args.database, args.table
        )
    )
    _emit(
        args,
        {
            "status": "success",
            "database": args.database,
            "table": args.table,
            "location": location,
        },
        location,
    )
    return 0


def register_command(
    args: argparse.Namespace, catalog: DataCatalog, config: CatalogConfig
) -> int:
    """Register TABLE_URI under NAME in the catalog.

    Returns:
        Exit code (0=success, 1=catalog error)
    """
    database = config.default_database if args.database is None else args.database
    catalog_id = args.catalog_id or config.catalog_id
    asyncio.run(
        catalog.record_table_storage_location(
            catalog_id,
            TableHandle(table_uri=args.table_uri),
            TableMetadata(name=args.name, description=args.description),
            database_name=database,
        )
    )
    _emit(
        args,
        {
            "status": "success",
            "database": database,
            "table": args.name,
            "location": args.table_uri,
        },
        f"Registered {database}.{args.name} at {args.table_uri}",
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="table-catalog",
        description="Resolve and register table storage locations in a data catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resolve where a Glue table keeps its data
  table-catalog resolve sales orders

  # Register a newly created table
  table-catalog register s3://lake/sales/orders orders --database sales
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version number and exit",
    )
    parser.add_argument(
        "--catalog",
        choices=SUPPORTED_CATALOGS,
        help="Catalog backend (default: from --config, else glue)",
    )
    parser.add_argument(
        "--config",
        help="Path to catalog configuration YAML file",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: from --config, else INFO)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print the storage location of a table",
    )
    resolve_parser.add_argument("database", help="Database name")
    resolve_parser.add_argument("table", help="Table name")
    resolve_parser.add_argument(
        "--catalog-id",
        help="Catalog ID (default: the account's default catalog)",
    )

    register_parser = subparsers.add_parser(
        "register",
        help="Register a table's storage location",
    )
    register_parser.add_argument("table_uri", help="Storage URI of the table")
    register_parser.add_argument("name", help="Table name")
    register_parser.add_argument("--description", help="Table description")
    register_parser.add_argument(
        "--catalog-id",
        help="Catalog ID (default: from --config)",
    )
    register_parser.add_argument(
        "--database",
        help="Target database (default: the configured default database)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    try:
        config = _load_config(args)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    setup_logging(level=config.logging.level, redact_secrets=config.logging.redaction)
    logger = get_logger(__name__)

    try:
        catalog = get_data_catalog(config.type, config=config)
        if args.command == "resolve":
            return resolve_command(args, catalog, config)
        elif args.command == "register":
            return register_command(args, catalog, config)
    except DataCatalogError as e:
        logger.error(f"{args.command} failed: {e}", extra={"extra_data": e.to_dict()})
        if args.json:
            print(json.dumps({"status": "failed", **e.to_dict()}))
        else:
            print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
