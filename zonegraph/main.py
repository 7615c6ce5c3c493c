# zonegraph/main.py
import logging
import sys

from zonegraph.graph.neo4j_store import Neo4jGraphStore
from zonegraph.graph.zone_import_processor import ZoneImportProcessor
from zonegraph.retrieval.answer_generator import AnswerGenerator, TemplateAnswerGenerator
from zonegraph.retrieval.query_executor import ZoneQueryExecutor
from zonegraph.utils import config
from zonegraph.utils.exceptions import ZoneGraphError
from zonegraph.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main():
    setup_logging(
        level=logging.DEBUG if config.DEBUG_MODE else logging.INFO,
        log_file=config.LOG_FILE,
    )
    logger.info("Starting zone graph pipeline...")

    missing = config.validate_neo4j_config()
    if missing:
        logger.error(f"Missing required environment variables: {', '.join(missing)}")
        sys.exit(1)

    store = None
    try:
        # Step 1: Connectivity and constraints
        try:
            store = Neo4jGraphStore(
                config.NEO4J_URI, config.NEO4J_USER, config.NEO4J_PASSWORD, config.NEO4J_DATABASE
            )
            store.verify_connectivity()
            store.ensure_schema()
        except ZoneGraphError as e:
            logger.error(f"Failed to connect to Neo4j: {e}")
            sys.exit(1)

        # Step 2: Ingest zones from CSV
        try:
            stats = ZoneImportProcessor().run_import(store, config.CSV_PATH)
            logger.info(f"Database initialized from {config.CSV_PATH}: {stats}")
        except ZoneGraphError as e:
            logger.error(f"Failed to initialize database: {e}")
            if e.__cause__ is not None:
                logger.error(f"Caused by: {e.__cause__}")
            sys.exit(1)

        # Step 3: Query and render
        try:
            records = ZoneQueryExecutor(store).buildings_with_utilities(config.QUERY_ZONE)
        except ZoneGraphError as e:
            logger.error(f"Error querying graph: {e}")
            sys.exit(1)

        generator: AnswerGenerator = TemplateAnswerGenerator()
        response = generator.generate(config.QUESTION, records)
        print("\nFinal Response:")
        print(response.answer)
    finally:
        if store is not None:
            store.close()


if __name__ == "__main__":
    main()
