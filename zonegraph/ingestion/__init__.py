# -*- coding: utf-8 -*-
"""
Ingestion package: CSV loading, row parsing and relationship derivation.
"""
from zonegraph.ingestion.row_parser import parse_zone_row
from zonegraph.ingestion.relationship_deriver import (
    BuildingStrategy,
    MockBuildingStrategy,
    derive_relationships,
)
from zonegraph.ingestion.zone_csv_loader import ZoneCSVLoader

__all__ = [
    'parse_zone_row',
    'BuildingStrategy',
    'MockBuildingStrategy',
    'derive_relationships',
    'ZoneCSVLoader',
]
