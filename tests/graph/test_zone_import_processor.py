# -*- coding: utf-8 -*-
"""
Module: test_zone_import_processor.py
Package: tests.graph
Purpose: Ingestion orchestrator tests against the in-memory graph store

Tests:
- End-to-end two-zone scenario (node / edge counts)
- Idempotence of repeated runs
- Symmetric NEIGHBORS edges, key-only zones from the adjacency table
- Abort-on-first-error vs skip_invalid_rows
- Store failures wrapped with zone / pair context
"""

# Third-party
import pytest

# Local
from conftest import make_row
from zonegraph.graph.zone_import_processor import ZoneImportProcessor
from zonegraph.utils.exceptions import (
    IngestionError,
    InvalidFieldError,
    MissingColumnError,
    SourceFileError,
)

SMALL_TABLE = {'Tempe': ['Mesa', 'Gilbert']}


def _counts(graph):
    return {
        'Zone': graph.node_count('Zone'),
        'Building': graph.node_count('Building'),
        'Utility': graph.node_count('Utility'),
        'WITHIN_ZONE': graph.edge_count('WITHIN_ZONE'),
        'SERVED_BY': graph.edge_count('SERVED_BY'),
        'NEIGHBORS': graph.edge_count('NEIGHBORS'),
    }


# ============================================================================
# TESTS: END-TO-END
# ============================================================================

def test_two_zone_scenario(store, tempe_mesa_csv):
    """Tempe (Water, Electric) + Mesa (Electric) with Tempe->[Mesa, Gilbert]."""
    processor = ZoneImportProcessor(neighbors=SMALL_TABLE)
    stats = processor.run_import(store, tempe_mesa_csv)
    graph = store.graph

    # Gilbert comes from the adjacency table only
    assert graph.node_count('Zone') == 3
    assert graph.node('Zone', 'Gilbert') == {}
    assert graph.node_count('Building') == 6
    assert graph.node_count('Utility') == 2
    assert graph.edge_count('WITHIN_ZONE') == 6
    assert graph.edge_count('SERVED_BY') == 3
    assert graph.has_edge(('Zone', 'Tempe'), 'SERVED_BY', ('Utility', 'Water'))
    assert graph.has_edge(('Zone', 'Tempe'), 'SERVED_BY', ('Utility', 'Electric'))
    assert graph.has_edge(('Zone', 'Mesa'), 'SERVED_BY', ('Utility', 'Electric'))

    for a, b in [('Tempe', 'Mesa'), ('Tempe', 'Gilbert')]:
        assert graph.has_edge(('Zone', a), 'NEIGHBORS', ('Zone', b))
        assert graph.has_edge(('Zone', b), 'NEIGHBORS', ('Zone', a))
    assert graph.edge_count('NEIGHBORS') == 4

    assert stats.zones == 2
    assert stats.buildings == 6
    assert stats.utility_links == 3
    assert stats.neighbor_pairs == 2
    assert stats.skipped_rows == 0


def test_zone_attributes_written(store, tempe_mesa_csv):
    ZoneImportProcessor(neighbors={}).run_import(store, tempe_mesa_csv)

    tempe = store.graph.node('Zone', 'Tempe')
    mesa = store.graph.node('Zone', 'Mesa')
    assert tempe['FamilySize'] == 4
    assert tempe['PublicTransportAccess'] is True
    assert mesa['PublicTransportAccess'] is False


def test_buildings_within_their_zone(store, tempe_mesa_csv):
    ZoneImportProcessor(neighbors={}).run_import(store, tempe_mesa_csv)

    for zone in ('Tempe', 'Mesa'):
        for letter in 'ABC':
            assert store.graph.has_edge(
                ('Building', f'{zone} Building {letter}'), 'WITHIN_ZONE', ('Zone', zone)
            )
            assert store.graph.node('Building', f'{zone} Building {letter}') == {'zone': zone}


def test_one_session_per_run(store, tempe_mesa_csv):
    ZoneImportProcessor(neighbors=SMALL_TABLE).run_import(store, tempe_mesa_csv)

    assert store.sessions_opened == 1
    assert store.sessions_closed == 1


# ============================================================================
# TESTS: IDEMPOTENCE
# ============================================================================

def test_rerun_creates_no_duplicates(store, tempe_mesa_csv):
    processor = ZoneImportProcessor(neighbors=SMALL_TABLE)

    processor.run_import(store, tempe_mesa_csv)
    first = _counts(store.graph)
    processor.run_import(store, tempe_mesa_csv)

    assert _counts(store.graph) == first


def test_default_table_is_symmetric_and_idempotent(store, write_csv):
    """Phoenix table lists most pairs from both sides; edges must not double."""
    path = write_csv([make_row('Scottsdale', 'Water')])
    processor = ZoneImportProcessor()

    processor.run_import(store, path)
    stats = processor.run_import(store, path)

    graph = store.graph
    for zone, neighbors in processor.neighbors.items():
        for neighbor in neighbors:
            assert graph.has_edge(('Zone', zone), 'NEIGHBORS', ('Zone', neighbor))
            assert graph.has_edge(('Zone', neighbor), 'NEIGHBORS', ('Zone', zone))

    undirected = {
        frozenset((zone, n)) for zone, ns in processor.neighbors.items() for n in ns
    }
    assert graph.edge_count('NEIGHBORS') == 2 * len(undirected)
    # pairs listed from both sides count once
    assert stats.neighbor_pairs == len(undirected)
    assert graph.node_count('Zone') == 7


def test_rerun_keeps_attributes_missing_from_batch(store, write_csv, header):
    """SET += semantics: a later batch without CrimeRate keeps the stored value."""
    with_crime = write_csv([make_row('Tempe') + ['7']], columns=header + ['CrimeRate'],
                           name='with_crime.csv')
    without_crime = write_csv([make_row('Tempe', FamilySize='5')], name='without_crime.csv')
    processor = ZoneImportProcessor(neighbors={})

    processor.run_import(store, with_crime)
    processor.run_import(store, without_crime)

    tempe = store.graph.node('Zone', 'Tempe')
    assert tempe['CrimeRate'] == 7
    assert tempe['FamilySize'] == 5


def test_empty_utilities_cell_creates_no_utility(store, write_csv):
    path = write_csv([make_row('Tempe', '')])

    stats = ZoneImportProcessor(neighbors={}).run_import(store, path)

    assert store.graph.node_count('Utility') == 0
    assert store.graph.edge_count('SERVED_BY') == 0
    assert stats.utility_links == 0


# ============================================================================
# TESTS: FAILURES
# ============================================================================

def test_parse_failure_aborts_before_any_write(store, write_csv):
    path = write_csv([make_row('Tempe'), make_row('Mesa', NearbyParks='lots')])

    with pytest.raises(InvalidFieldError, match='NearbyParks'):
        ZoneImportProcessor(neighbors=SMALL_TABLE).run_import(store, path)

    assert store.graph.writes == 0
    assert store.sessions_opened == 0


def test_missing_source_file(store, tmp_path):
    with pytest.raises(SourceFileError):
        ZoneImportProcessor().run_import(store, tmp_path / 'missing.csv')


def test_skip_invalid_rows_reports_and_continues(store, write_csv):
    path = write_csv([
        make_row('Tempe'),
        make_row('Mesa', FamilySize='four'),
        make_row('Gilbert', 'Water'),
    ])

    stats = ZoneImportProcessor(neighbors={}, skip_invalid_rows=True).run_import(store, path)

    assert stats.zones == 2
    assert stats.skipped_rows == 1
    failure = stats.failures[0]
    assert failure.row_number == 3
    assert failure.column == 'FamilySize'
    assert store.graph.node('Zone', 'Mesa') is None
    assert store.graph.node('Zone', 'Gilbert') is not None


def test_skip_mode_still_aborts_on_missing_column(store, write_csv, header):
    idx = header.index('ShoppingCenters')
    row = make_row('Tempe')
    del header[idx]
    del row[idx]
    path = write_csv([row], columns=header)

    with pytest.raises(MissingColumnError):
        ZoneImportProcessor(neighbors={}, skip_invalid_rows=True).run_import(store, path)


def test_store_failure_aborts_with_zone_context(store, tempe_mesa_csv):
    """Mesa's write fails: Tempe stays committed, adjacency never runs."""
    store.fail_when = lambda op, entity: op == 'ensure_node' and entity == 'Zone:Mesa'

    with pytest.raises(IngestionError) as exc_info:
        ZoneImportProcessor(neighbors=SMALL_TABLE).run_import(store, tempe_mesa_csv)

    error = exc_info.value
    assert error.stage == 'persist_zone'
    assert error.subject == 'Mesa'
    assert error.__cause__ is not None
    assert store.graph.node('Zone', 'Tempe') is not None
    assert store.graph.edge_count('NEIGHBORS') == 0
    assert store.sessions_closed == store.sessions_opened


def test_rerun_after_failure_heals(store, tempe_mesa_csv):
    processor = ZoneImportProcessor(neighbors=SMALL_TABLE)
    store.fail_when = lambda op, entity: entity == 'Zone:Mesa'
    with pytest.raises(IngestionError):
        processor.run_import(store, tempe_mesa_csv)

    store.fail_when = None
    processor.run_import(store, tempe_mesa_csv)

    assert store.graph.node_count('Building') == 6
    assert store.graph.edge_count('SERVED_BY') == 3
    assert store.graph.edge_count('NEIGHBORS') == 4


def test_adjacency_failure_names_the_pair(store, tempe_mesa_csv):
    store.fail_when = lambda op, entity: op == 'ensure_edge' and 'NEIGHBORS' in entity \
        and 'Gilbert' in entity

    with pytest.raises(IngestionError) as exc_info:
        ZoneImportProcessor(neighbors=SMALL_TABLE).run_import(store, tempe_mesa_csv)

    assert exc_info.value.stage == 'persist_adjacency'
    assert exc_info.value.subject == 'Tempe <-> Gilbert'


def test_self_neighbor_entry_ignored(store, tempe_mesa_csv):
    stats = ZoneImportProcessor(neighbors={'Tempe': ['Tempe', 'Mesa']}).run_import(
        store, tempe_mesa_csv
    )

    assert stats.neighbor_pairs == 1
    assert not store.graph.has_edge(('Zone', 'Tempe'), 'NEIGHBORS', ('Zone', 'Tempe'))


def test_oversized_integer_aborts_before_any_write(store, write_csv):
    """A value the store cannot hold is a parse failure, not a mid-run crash."""
    path = write_csv([make_row('Tempe'), make_row('Mesa', FamilySize='99999999999999999999')])

    with pytest.raises(InvalidFieldError, match='FamilySize'):
        ZoneImportProcessor(neighbors=SMALL_TABLE).run_import(store, path)

    assert store.graph.writes == 0


def test_pair_listed_from_both_sides_counted_once(store, tempe_mesa_csv):
    stats = ZoneImportProcessor(neighbors={'Tempe': ['Mesa'], 'Mesa': ['Tempe']}).run_import(
        store, tempe_mesa_csv
    )

    assert stats.neighbor_pairs == 1
    assert store.graph.edge_count('NEIGHBORS') == 2
