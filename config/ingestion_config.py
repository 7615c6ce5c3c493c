# -*- coding: utf-8 -*-
"""
Module: ingestion_config.py
Package: config
Purpose: Static configuration for zone CSV ingestion and graph construction

Holds the column contract of the source CSV, parsing tokens, the synthetic
building letters and the zone adjacency table. Everything here is plain data
so the orchestrator can be handed a different table in tests.
"""

# ============================================================================
# SOURCE COLUMNS
# ============================================================================

ZONE_COLUMN = 'Zone'
UTILITIES_COLUMN = 'Utilities'
TRANSIT_COLUMN = 'PublicTransportAccess'

# Columns that must be present in the header (order irrelevant)
REQUIRED_COLUMNS = [
    'Zone',
    'FamilySize',
    'MaritalStatus',
    'NumChildren',
    'AgeGroup',
    'NearbyParks',
    'NearbySchools',
    'NearbyHospitals',
    'LandType',
    'Landscape',
    'PublicTransportAccess',
    'Utilities',
    'ShoppingCenters',
]

# Required columns parsed as integers
INT_COLUMNS = [
    'FamilySize',
    'NumChildren',
    'NearbyParks',
    'NearbySchools',
    'NearbyHospitals',
    'ShoppingCenters',
]

# Required columns kept as text
STR_COLUMNS = [
    'MaritalStatus',
    'AgeGroup',
    'LandType',
    'Landscape',
]

# Numeric attributes parsed only when the column exists
OPTIONAL_INT_COLUMNS = [
    'FitnessCenters',
    'ChildCareServices',
    'AvgHousingCost',
    'CrimeRate',
    'RentalAvailability',
    'AvgSizePerHome',
    'AirQualityIndex',
    'GreenCover',
    'NoisePollutionLevel',
]


# ============================================================================
# PARSING TOKENS
# ============================================================================

TRANSIT_AFFIRMATIVE = 'Yes'   # exact match, case-sensitive
UTILITY_DELIMITER = ','

# Integer cells: optional sign, ASCII digits only; values must fit Neo4j's 64-bit INTEGER
INTEGER_PATTERN = r'[+-]?[0-9]+'
INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1


# ============================================================================
# DERIVED ENTITIES
# ============================================================================

# Mock buildings per zone: "<Zone> Building A", "... B", "... C"
BUILDING_LETTERS = 'ABC'


# ============================================================================
# GRAPH SCHEMA
# ============================================================================

ZONE_LABEL = 'Zone'
BUILDING_LABEL = 'Building'
UTILITY_LABEL = 'Utility'
NAME_KEY = 'name'

WITHIN_ZONE = 'WITHIN_ZONE'
SERVED_BY = 'SERVED_BY'
NEIGHBORS = 'NEIGHBORS'


# ============================================================================
# ZONE ADJACENCY
# ============================================================================

# zone -> neighbors; NEIGHBORS edges are written in both directions, so an
# entry only needs to appear on one side
ZONE_NEIGHBORS = {
    'Downtown Phoenix': ['Tempe', 'Scottsdale', 'Chandler'],
    'Tempe': ['Downtown Phoenix', 'Mesa', 'Gilbert'],
    'Scottsdale': ['Downtown Phoenix', 'Mesa'],
    'Mesa': ['Tempe', 'Scottsdale', 'Gilbert'],
    'Gilbert': ['Tempe', 'Mesa', 'Chandler'],
    'Chandler': ['Gilbert', 'Downtown Phoenix'],
    'Sun City': ['Scottsdale', 'Mesa'],  # senior-friendly zones
}
