# -*- coding: utf-8 -*-
"""
Neo4j graph store adapter for the zone graph.

The only module that talks to Neo4j. Writes are MERGE-based upserts, so every
operation can be repeated without creating duplicate nodes or edges, and each
one runs in its own managed transaction (execute_write / execute_read).
Driver failures are re-raised as GraphStoreError naming the operation and the
entity involved.

Labels, keys and relationship types cannot be passed as Cypher parameters;
they are validated as plain identifiers before being formatted into a query.

Examples:
    store = Neo4jGraphStore(uri, user, password)
    try:
        store.ensure_schema()
        with store.session() as graph:
            graph.ensure_node("Zone", "name", "Tempe", {"FamilySize": 4})
            graph.ensure_edge(
                NodeSelector("Zone", "name", "Tempe"),
                "NEIGHBORS",
                NodeSelector("Zone", "name", "Mesa"),
            )
    finally:
        store.close()
"""
# Standard library
import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

# Third-party
from neo4j import GraphDatabase, Session
from neo4j.exceptions import DriverError, Neo4jError

# Config imports (direct)
from config.ingestion_config import BUILDING_LABEL, NAME_KEY, UTILITY_LABEL, ZONE_LABEL

# Local
from zonegraph.utils.dataclasses import NodeSelector
from zonegraph.utils.exceptions import GraphStoreError
from zonegraph.utils.logger import get_logger

logger = get_logger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def check_identifier(value: str, kind: str) -> str:
    """Reject anything that is not safe to format into Cypher as a label/type/key."""
    if not isinstance(value, str) or not _IDENTIFIER.match(value):
        raise ValueError(f"Invalid {kind}: {value!r}")
    return value


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__


class Neo4jGraphSession:
    """
    Upsert and read operations bound to one driver session.

    Obtained from Neo4jGraphStore.session(); not meant to outlive it.
    """

    def __init__(self, session: Session):
        self._session = session

    def ensure_node(self, label: str, key: str, value: Any,
                    properties: Optional[Dict[str, Any]] = None) -> None:
        """
        Create the node if absent, otherwise merge ``properties`` onto it.

        ``SET n += $properties`` only touches the given keys, so attributes
        set by an earlier run and missing here are kept.
        """
        check_identifier(label, "label")
        check_identifier(key, "key")
        query = f"""
        MERGE (n:{label} {{{key}: $value}})
        SET n += $properties
        """
        entity = str(NodeSelector(label, key, value))
        self._write("ensure_node", entity, query,
                    {"value": value, "properties": properties or {}})
        logger.debug(f"Ensured node {entity}")

    def ensure_edge(self, source: NodeSelector, rel_type: str,
                    target: NodeSelector) -> None:
        """
        Create both endpoints (key only) and the directed edge if absent.

        MERGE on the full pattern means a second call is a no-op.
        """
        for selector in (source, target):
            check_identifier(selector.label, "label")
            check_identifier(selector.key, "key")
        check_identifier(rel_type, "relationship type")

        query = f"""
        MERGE (a:{source.label} {{{source.key}: $source_value}})
        MERGE (b:{target.label} {{{target.key}: $target_value}})
        MERGE (a)-[:{rel_type}]->(b)
        """
        entity = f"{source}-[:{rel_type}]->{target}"
        self._write("ensure_edge", entity, query,
                    {"source_value": source.value, "target_value": target.value})
        logger.debug(f"Ensured edge {entity}")

    def read(self, query: str,
             parameters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Run a read-only query and return every row as a flat dict.

        Records are consumed inside the transaction function, before it closes.
        """
        try:
            return self._session.execute_read(self._read_tx, query, parameters or {})
        except (Neo4jError, DriverError) as e:
            raise GraphStoreError("read", "query", _describe(e)) from e

    def _write(self, operation: str, entity: str, query: str,
               parameters: Dict[str, Any]) -> None:
        try:
            self._session.execute_write(self._write_tx, query, parameters)
        except (Neo4jError, DriverError) as e:
            raise GraphStoreError(operation, entity, _describe(e)) from e

    @staticmethod
    def _write_tx(tx, query: str, parameters: Dict[str, Any]):
        tx.run(query, parameters).consume()

    @staticmethod
    def _read_tx(tx, query: str, parameters: Dict[str, Any]) -> List[Dict[str, Any]]:
        result = tx.run(query, parameters)
        return [record.data() for record in result]


class Neo4jGraphStore:
    """
    Owns the Neo4j driver and hands out scoped sessions.

    The driver is created once per process; each logical unit of work (one
    ingestion run, one query) gets its own session via session().
    """

    def __init__(self, uri: str, user: str, password: str, database: str = "neo4j"):
        """
        Initialize Neo4j connection.

        Args:
            uri: Neo4j connection URI (e.g., neo4j+s://xxx.databases.neo4j.io)
            user: Username (typically 'neo4j')
            password: Database password
            database: Target database name

        Raises:
            GraphStoreError: The driver rejected the URI or settings
        """
        self.database = database
        try:
            self.driver = GraphDatabase.driver(uri, auth=(user, password))
        except (DriverError, Neo4jError, ValueError) as e:
            # malformed URI or unsupported scheme
            raise GraphStoreError("connect", uri, _describe(e)) from e
        logger.info(f"Connected to Neo4j at {uri}")

    def close(self):
        """Close Neo4j driver connection."""
        self.driver.close()
        logger.info("Neo4j connection closed")

    def verify_connectivity(self) -> None:
        try:
            self.driver.verify_connectivity()
        except (Neo4jError, DriverError) as e:
            raise GraphStoreError("verify_connectivity", "driver", _describe(e)) from e

    def ensure_schema(self) -> None:
        """
        Create one uniqueness constraint per node label on its name key.

        IF NOT EXISTS keeps this safe to run before every ingestion.
        """
        logger.info("Creating constraints...")
        constraints = [
            f"CREATE CONSTRAINT {label.lower()}_{NAME_KEY} IF NOT EXISTS "
            f"FOR (n:{label}) REQUIRE n.{NAME_KEY} IS UNIQUE"
            for label in (ZONE_LABEL, BUILDING_LABEL, UTILITY_LABEL)
        ]
        with self.driver.session(database=self.database) as session:
            for constraint in constraints:
                try:
                    session.execute_write(Neo4jGraphSession._write_tx, constraint, {})
                except (Neo4jError, DriverError) as e:
                    raise GraphStoreError("ensure_schema", constraint, _describe(e)) from e
                logger.debug(f"Created: {constraint[:60]}...")
        logger.info(f"Created {len(constraints)} constraints")

    @contextmanager
    def session(self) -> Iterator[Neo4jGraphSession]:
        """Yield a session-bound adapter; the session is closed on every exit path."""
        session = self.driver.session(database=self.database)
        try:
            yield Neo4jGraphSession(session)
        finally:
            session.close()
