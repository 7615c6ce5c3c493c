# -*- coding: utf-8 -*-
"""
Relationship deriver: attaches owned buildings to a parsed zone.

The source data has no buildings, so a strategy synthesizes them. The default
MockBuildingStrategy is a placeholder; a strategy backed by real building data
can be passed in without touching the parser or the orchestrator.
"""
from dataclasses import dataclass
from typing import List, Optional, Protocol

from config.ingestion_config import BUILDING_LETTERS
from zonegraph.utils.dataclasses import Zone


class BuildingStrategy(Protocol):
    def buildings_for(self, zone: Zone) -> List[str]: ...


@dataclass
class MockBuildingStrategy:
    """'<Zone> Building A', '... B', '... C' (one per letter, in order)."""

    letters: str = BUILDING_LETTERS

    def buildings_for(self, zone: Zone) -> List[str]:
        return [f"{zone.name} Building {letter}" for letter in self.letters]


def derive_relationships(zone: Zone, strategy: Optional[BuildingStrategy] = None) -> Zone:
    """Return a copy of ``zone`` with the strategy's buildings appended."""
    strategy = strategy or MockBuildingStrategy()
    return zone.with_buildings(strategy.buildings_for(zone))
