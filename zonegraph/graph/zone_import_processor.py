# -*- coding: utf-8 -*-
"""
Zone graph import orchestrator.

Drives a full ingestion run in three linear steps:

    1. Load      CSV -> row parser -> relationship deriver -> List[Zone]
    2. Zones     Zone node (all attributes), Building nodes + WITHIN_ZONE,
                 Utility nodes + SERVED_BY, in input order
    3. Adjacency NEIGHBORS in both directions for every adjacency table entry

Parsing finishes before the first write, so a bad row aborts the run with
nothing written. Each node/edge is committed on its own; a store failure
stops the run and leaves earlier writes in place. Because every write is a
MERGE, re-running the whole import against the same store converges to the
same graph.

By default the first invalid row aborts the run. With skip_invalid_rows=True
bad rows are collected as ParseFailure records, skipped, and reported in the
returned IngestionStats.

Examples:
    store = Neo4jGraphStore(uri, user, password)
    processor = ZoneImportProcessor()
    stats = processor.run_import(store, Path('data/urban_planning_data.csv'))

    # Smaller adjacency table (e.g. in tests)
    processor = ZoneImportProcessor(neighbors={'Tempe': ['Mesa']})
"""
# Standard library
import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

# Third-party
from tqdm import tqdm

# Config imports (direct)
from config.ingestion_config import (
    BUILDING_LABEL,
    NAME_KEY,
    NEIGHBORS,
    SERVED_BY,
    UTILITY_LABEL,
    WITHIN_ZONE,
    ZONE_LABEL,
    ZONE_NEIGHBORS,
)

# Local
from zonegraph.graph.store import GraphSession, GraphStore
from zonegraph.ingestion.relationship_deriver import BuildingStrategy, derive_relationships
from zonegraph.ingestion.row_parser import parse_zone_row
from zonegraph.ingestion.zone_csv_loader import ZoneCSVLoader
from zonegraph.utils.dataclasses import (
    BuildingAttributes,
    IngestionStats,
    NodeSelector,
    ParseFailure,
    UtilityAttributes,
    Zone,
)
from zonegraph.utils.exceptions import (
    GraphStoreError,
    IngestionError,
    InvalidFieldError,
    MissingColumnError,
    RowParseError,
)
from zonegraph.utils.logger import get_logger

logger = get_logger(__name__)


def zone_selector(name: str) -> NodeSelector:
    return NodeSelector(ZONE_LABEL, NAME_KEY, name)


class ZoneImportProcessor:
    """
    Orchestrates zone ingestion into a graph store.

    Handles:
    - Loading and parsing all rows before any write
    - Zone / Building / Utility upserts and their edges
    - Symmetric NEIGHBORS edges from an injected adjacency table
    """

    def __init__(
        self,
        neighbors: Optional[Dict[str, List[str]]] = None,
        building_strategy: Optional[BuildingStrategy] = None,
        skip_invalid_rows: bool = False,
    ):
        """
        Initialize import processor.

        Args:
            neighbors: zone name -> neighbor names (default: ZONE_NEIGHBORS)
            building_strategy: Building synthesis strategy (default: mock A/B/C)
            skip_invalid_rows: Skip and report bad rows instead of aborting
        """
        self.neighbors = ZONE_NEIGHBORS if neighbors is None else neighbors
        self.building_strategy = building_strategy
        self.skip_invalid_rows = skip_invalid_rows

    # =========================================================================
    # STEP 1: LOAD
    # =========================================================================

    def load_zones(self, csv_path: Union[str, Path]) -> Tuple[List[Zone], List[ParseFailure]]:
        """
        Parse every row of the CSV into zones with derived buildings.

        Raises:
            SourceFileError: CSV cannot be read
            RowParseError: First invalid row (unless skip_invalid_rows)
        """
        header, rows = ZoneCSVLoader(csv_path).read()

        zones: List[Zone] = []
        failures: List[ParseFailure] = []
        for row_number, cells in rows:
            try:
                zone = parse_zone_row(header, cells, row_number=row_number)
            except RowParseError as e:
                if not self.skip_invalid_rows or isinstance(e, MissingColumnError):
                    raise
                failures.append(ParseFailure(
                    row_number=row_number,
                    message=e.message,
                    column=e.field if isinstance(e, InvalidFieldError) else None,
                ))
                logger.warning(f"Skipping {e.message}")
                continue

            zone = derive_relationships(zone, self.building_strategy)
            logger.debug(
                f"Parsed Zone: {zone.name} with Buildings: {zone.buildings} "
                f"and Utilities: {zone.utilities}"
            )
            zones.append(zone)

        logger.info(f"Loaded {len(zones)} zones ({len(failures)} rows skipped)")
        return zones, failures

    # =========================================================================
    # STEP 2: ZONES
    # =========================================================================

    def persist_zone(self, graph: GraphSession, zone: Zone) -> None:
        """
        Upsert one zone with its buildings and utilities.

        Raises:
            IngestionError: Any store failure, wrapped with the zone name
        """
        zone_node = zone_selector(zone.name)
        try:
            graph.ensure_node(ZONE_LABEL, NAME_KEY, zone.name, zone.attributes.to_properties())

            for name in zone.buildings:
                building = BuildingAttributes(name=name, zone_name=zone.name)
                graph.ensure_node(BUILDING_LABEL, NAME_KEY, building.name, building.to_properties())
                graph.ensure_edge(
                    NodeSelector(BUILDING_LABEL, NAME_KEY, building.name),
                    WITHIN_ZONE,
                    zone_node,
                )

            for name in zone.utilities:
                utility = UtilityAttributes(name=name)
                graph.ensure_node(UTILITY_LABEL, NAME_KEY, utility.name, utility.to_properties())
                graph.ensure_edge(
                    zone_node,
                    SERVED_BY,
                    NodeSelector(UTILITY_LABEL, NAME_KEY, utility.name),
                )
        except GraphStoreError as e:
            raise IngestionError("persist_zone", zone.name, e.message) from e

    # =========================================================================
    # STEP 3: ADJACENCY
    # =========================================================================

    def persist_adjacency(self, graph: GraphSession,
                          neighbors: Optional[Dict[str, List[str]]] = None) -> int:
        """
        Write NEIGHBORS in both directions for every (zone, neighbor) entry.

        Zones missing from the CSV are created by key only. Entries listed
        from both sides resolve to the same two edges.

        Returns:
            Number of distinct zone pairs linked
        """
        table = self.neighbors if neighbors is None else neighbors
        pairs = set()
        for zone, zone_neighbors in table.items():
            for neighbor in zone_neighbors:
                if neighbor == zone:
                    logger.warning(f"Ignoring self-neighbor entry for {zone}")
                    continue
                logger.debug(f"Creating NEIGHBORS relationship: {zone} <-> {neighbor}")
                try:
                    graph.ensure_edge(zone_selector(zone), NEIGHBORS, zone_selector(neighbor))
                    graph.ensure_edge(zone_selector(neighbor), NEIGHBORS, zone_selector(zone))
                except GraphStoreError as e:
                    raise IngestionError(
                        "persist_adjacency", f"{zone} <-> {neighbor}", e.message
                    ) from e
                pairs.add(frozenset((zone, neighbor)))
        return len(pairs)

    # =========================================================================
    # FULL RUN
    # =========================================================================

    def run_import(self, store: GraphStore, csv_path: Union[str, Path]) -> IngestionStats:
        """
        Execute the complete ingestion.

        Args:
            store: Graph store handing out scoped sessions
            csv_path: Zone CSV file

        Returns:
            IngestionStats for the run
        """
        stats = IngestionStats()

        logger.info("\n=== STEP 1: LOADING ZONES ===")
        t0 = time.perf_counter()
        zones, failures = self.load_zones(csv_path)
        t1 = time.perf_counter()
        stats.failures = failures
        stats.skipped_rows = len(failures)

        with store.session() as graph:
            logger.info("\n=== STEP 2: PERSISTING ZONES ===")
            for zone in tqdm(zones, desc="Zones"):
                self.persist_zone(graph, zone)
                stats.zones += 1
                stats.buildings += len(zone.buildings)
                stats.utility_links += len(zone.utilities)

            logger.info("\n=== STEP 3: PERSISTING ADJACENCY ===")
            stats.neighbor_pairs = self.persist_adjacency(graph)

        stats.load_ms = (t1 - t0) * 1000.0
        stats.persist_ms = (time.perf_counter() - t1) * 1000.0

        for failure in failures:
            logger.warning(f"Skipped {failure.message}")
        logger.info(f"\n=== IMPORT COMPLETE === {stats}")
        return stats
