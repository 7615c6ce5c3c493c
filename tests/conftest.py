# -*- coding: utf-8 -*-
"""
Shared fixtures for zone graph tests.

InMemoryGraphStore mimics the MERGE semantics of the Neo4j adapter: nodes are
keyed by (label, key, value), edges by (source, type, target), and repeated
upserts never duplicate either. It answers the building/utility traversal so
the query executor can run against it.
"""

# Standard library
import csv
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

# Third-party
import pytest

# Local
from zonegraph.retrieval.query_executor import BUILDINGS_WITH_UTILITIES_QUERY
from zonegraph.utils.dataclasses import NodeSelector
from zonegraph.utils.exceptions import GraphStoreError

NodeKey = Tuple[str, str, Any]
EdgeKey = Tuple[NodeKey, str, NodeKey]


HEADER = [
    'Zone', 'FamilySize', 'MaritalStatus', 'NumChildren', 'AgeGroup',
    'NearbyParks', 'NearbySchools', 'NearbyHospitals', 'LandType', 'Landscape',
    'PublicTransportAccess', 'Utilities', 'ShoppingCenters',
]


def make_row(zone: str = 'Tempe', utilities: str = 'Water,Electric', **overrides) -> List[str]:
    """Build a valid row for HEADER, with per-column overrides."""
    values = {
        'Zone': zone,
        'FamilySize': '4',
        'MaritalStatus': 'Married',
        'NumChildren': '2',
        'AgeGroup': '25-34',
        'NearbyParks': '3',
        'NearbySchools': '5',
        'NearbyHospitals': '1',
        'LandType': 'Urban',
        'Landscape': 'Flat',
        'PublicTransportAccess': 'Yes',
        'Utilities': utilities,
        'ShoppingCenters': '6',
    }
    values.update(overrides)
    return [values[column] for column in HEADER]


# ============================================================================
# IN-MEMORY STORE
# ============================================================================

class InMemoryGraph:
    """Graph state shared by all sessions of one store."""

    def __init__(self):
        self.nodes: Dict[NodeKey, Dict[str, Any]] = {}
        self.edges: Set[EdgeKey] = set()
        self.writes = 0

    def node_count(self, label: str) -> int:
        return sum(1 for (node_label, _, _) in self.nodes if node_label == label)

    def edge_count(self, rel_type: str) -> int:
        return sum(1 for (_, rel, _) in self.edges if rel == rel_type)

    def node(self, label: str, name: str) -> Optional[Dict[str, Any]]:
        return self.nodes.get((label, 'name', name))

    def has_edge(self, source: Tuple[str, str], rel_type: str, target: Tuple[str, str]) -> bool:
        return (
            (source[0], 'name', source[1]), rel_type, (target[0], 'name', target[1])
        ) in self.edges


class InMemoryGraphSession:
    def __init__(self, graph: InMemoryGraph, fail_when: Optional[Callable[[str, str], bool]]):
        self.graph = graph
        self.fail_when = fail_when

    def _check(self, operation: str, entity: str):
        if self.fail_when and self.fail_when(operation, entity):
            raise GraphStoreError(operation, entity, "injected failure")

    def ensure_node(self, label, key, value, properties=None):
        self._check("ensure_node", f"{label}:{value}")
        self.graph.nodes.setdefault((label, key, value), {}).update(properties or {})
        self.graph.writes += 1

    def ensure_edge(self, source: NodeSelector, rel_type: str, target: NodeSelector):
        self._check("ensure_edge", f"{source.value}-{rel_type}->{target.value}")
        src = (source.label, source.key, source.value)
        dst = (target.label, target.key, target.value)
        self.graph.nodes.setdefault(src, {})
        self.graph.nodes.setdefault(dst, {})
        self.graph.edges.add((src, rel_type, dst))
        self.graph.writes += 1

    def read(self, query, parameters=None):
        self._check("read", "query")
        if query != BUILDINGS_WITH_UTILITIES_QUERY:
            raise NotImplementedError(query)
        zone = ('Zone', 'name', (parameters or {})['zone'])
        buildings = [s for (s, rel, d) in self.graph.edges if rel == 'WITHIN_ZONE' and d == zone]
        utilities = [d for (s, rel, d) in self.graph.edges if rel == 'SERVED_BY' and s == zone]
        rows = [
            {'building': b[2], 'utility': u[2]}
            for b in buildings
            for u in utilities
        ]
        return sorted(rows, key=lambda r: (r['building'], r['utility']))


class InMemoryGraphStore:
    def __init__(self):
        self.graph = InMemoryGraph()
        self.fail_when: Optional[Callable[[str, str], bool]] = None
        self.sessions_opened = 0
        self.sessions_closed = 0

    @contextmanager
    def session(self):
        self.sessions_opened += 1
        try:
            yield InMemoryGraphSession(self.graph, self.fail_when)
        finally:
            self.sessions_closed += 1


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def store():
    """Empty in-memory graph store."""
    return InMemoryGraphStore()


@pytest.fixture
def header():
    return list(HEADER)


@pytest.fixture
def write_csv(tmp_path):
    """Write rows (with HEADER unless given) to a CSV file and return its path."""
    def _write(rows, columns=None, name='zones.csv'):
        path = tmp_path / name
        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(columns or HEADER)
            writer.writerows(rows)
        return path
    return _write


@pytest.fixture
def tempe_mesa_csv(write_csv):
    """Two-zone source: Tempe (Water, Electric) and Mesa (Electric)."""
    return write_csv([
        make_row('Tempe', 'Water,Electric'),
        make_row('Mesa', 'Electric', PublicTransportAccess='No'),
    ])
