# -*- coding: utf-8 -*-
"""
Query executor for the zone graph.

Runs the one supported traversal: buildings within a zone joined to the
utilities serving that zone. Results are sorted by building then utility so
callers never depend on store iteration order.
"""

# Standard library
from typing import Any, Dict, List

# Local
from zonegraph.graph.store import GraphStore
from zonegraph.utils.exceptions import GraphStoreError, QueryExecutionError
from zonegraph.utils.logger import get_logger

logger = get_logger(__name__)


BUILDINGS_WITH_UTILITIES_QUERY = """
MATCH (b:Building)-[:WITHIN_ZONE]->(z:Zone {name: $zone})-[:SERVED_BY]->(u:Utility)
RETURN b.name AS building, u.name AS utility
ORDER BY building, utility
"""


class ZoneQueryExecutor:
    """
    Execute the building/utility traversal in its own read session.

    An unknown zone, or a zone without buildings or utilities, yields an empty
    list; only a failing transaction raises.
    """

    def __init__(self, store: GraphStore):
        self.store = store

    def buildings_with_utilities(self, zone_name: str) -> List[Dict[str, Any]]:
        """
        Return [{'building': ..., 'utility': ...}, ...] for ``zone_name``.

        Raises:
            QueryExecutionError: The read transaction failed
        """
        logger.info(f"Running Cypher query for zone: {zone_name}")
        logger.debug(BUILDINGS_WITH_UTILITIES_QUERY)

        try:
            with self.store.session() as graph:
                rows = graph.read(BUILDINGS_WITH_UTILITIES_QUERY, {"zone": zone_name})
        except GraphStoreError as e:
            raise QueryExecutionError(zone_name, e.message) from e

        records = [{"building": row["building"], "utility": row["utility"]} for row in rows]
        for record in records:
            logger.debug(f"Found record: building={record['building']}, utility={record['utility']}")

        if not records:
            logger.warning(f"No results found for zone: {zone_name}")
        else:
            logger.info(f"Found {len(records)} building/utility pairs")
        return records
