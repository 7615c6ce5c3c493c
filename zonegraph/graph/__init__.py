# -*- coding: utf-8 -*-
"""
Graph construction package.

Contains neo4j_store (the Neo4j adapter: idempotent node/edge upserts and read
transactions), store (the protocols the rest of the pipeline codes against)
and zone_import_processor (the ingestion orchestrator).
"""
