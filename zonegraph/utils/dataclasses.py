# -*- coding: utf-8 -*-
"""
Core data structures for the zone graph pipeline

Single source of truth for the entities written to the graph and the records
passed between pipeline stages. Each entity kind has its own attribute record;
the generic ``Dict[str, Any]`` form only appears through ``to_properties()``,
at the graph store boundary.

Examples:
    from zonegraph.utils.dataclasses import Zone, ZoneAttributes

    zone = Zone(name="Tempe", attributes=attrs, utilities=["Water"])
    zone.attributes.to_properties()   # {'FamilySize': 4, ...}
"""
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional


# ============================================================================
# GRAPH ENTITIES
# ============================================================================

@dataclass(frozen=True)
class ZoneAttributes:
    """
    Descriptive attributes of a zone.

    Field names match the CSV columns and the Neo4j property keys. Optional
    numeric fields are None when their column is absent from the source and
    are then left out of the property map, so an existing node value is kept.
    """
    FamilySize: int
    MaritalStatus: str
    NumChildren: int
    AgeGroup: str
    NearbyParks: int
    NearbySchools: int
    NearbyHospitals: int
    LandType: str
    Landscape: str
    PublicTransportAccess: bool
    ShoppingCenters: int
    FitnessCenters: Optional[int] = None
    ChildCareServices: Optional[int] = None
    AvgHousingCost: Optional[int] = None
    CrimeRate: Optional[int] = None
    RentalAvailability: Optional[int] = None
    AvgSizePerHome: Optional[int] = None
    AirQualityIndex: Optional[int] = None
    GreenCover: Optional[int] = None
    NoisePollutionLevel: Optional[int] = None

    def to_properties(self) -> Dict[str, Any]:
        """Property map for ``SET n += $properties`` (None values dropped)."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class Zone:
    """
    A named region and its derived collections.

    ``utilities`` comes from the source row; ``buildings`` is filled in by the
    relationship deriver and is empty straight out of the parser.
    """
    name: str
    attributes: ZoneAttributes
    utilities: List[str] = field(default_factory=list)
    buildings: List[str] = field(default_factory=list)

    def with_buildings(self, buildings: List[str]) -> "Zone":
        return replace(self, buildings=list(self.buildings) + list(buildings))


@dataclass(frozen=True)
class BuildingAttributes:
    """Building node record; always owned by exactly one zone."""
    name: str
    zone_name: str

    def to_properties(self) -> Dict[str, Any]:
        # owning zone denormalized for lookups; the WITHIN_ZONE edge is authoritative
        return {"zone": self.zone_name}


@dataclass(frozen=True)
class UtilityAttributes:
    """Utility node record; shared across zones, identified by name."""
    name: str

    def to_properties(self) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True)
class NodeSelector:
    """Identifies one node by label and key property, e.g. (:Zone {name: 'Mesa'})."""
    label: str
    key: str
    value: Any

    def __str__(self) -> str:
        return f"({self.label} {{{self.key}: {self.value!r}}})"


# ============================================================================
# PIPELINE RECORDS
# ============================================================================

@dataclass
class ParseFailure:
    """A source row skipped during ingestion (skip_invalid_rows mode)."""
    row_number: int
    message: str
    column: Optional[str] = None


@dataclass
class IngestionStats:
    """Summary of one ingestion run."""
    zones: int = 0
    buildings: int = 0
    utility_links: int = 0
    neighbor_pairs: int = 0
    skipped_rows: int = 0
    failures: List[ParseFailure] = field(default_factory=list)
    load_ms: float = 0.0
    persist_ms: float = 0.0

    def __str__(self) -> str:
        return (
            f"Zones: {self.zones} | Buildings: {self.buildings} | "
            f"SERVED_BY: {self.utility_links} | NEIGHBORS pairs: {self.neighbor_pairs} | "
            f"Skipped rows: {self.skipped_rows} | "
            f"load {self.load_ms:.1f} ms, persist {self.persist_ms:.1f} ms"
        )
