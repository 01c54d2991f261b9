"""CLI adapter creating the tables owned by the settlement engine."""

from settlement_engine.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from settlement_engine.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from settlement_engine.infrastructure.schema import create_schema


def main() -> None:
    """Create missing settlement and vote tables."""
    logger = get_app_logger()
    db_adapter = SqlAlchemyDatabaseEngineAdapter()

    tables = create_schema(db_adapter.get_engine())

    logger.info(f"Schema ready: {', '.join(tables)}")
    get_usage_logger().info("init_schema_cli ran")
    print(f"Ensured {len(tables)} tables exist.")


if __name__ == "__main__":  # pragma: no cover
    main()
