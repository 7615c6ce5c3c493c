# -*- coding: utf-8 -*-
"""
Zone graph package.

Loads urban planning zones from CSV into Neo4j (zones, buildings, utilities and
their neighbor links) and answers one fixed traversal over the resulting graph.
"""

__version__ = "0.1.0"
