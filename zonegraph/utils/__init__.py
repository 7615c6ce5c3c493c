# -*- coding: utf-8 -*-
"""
Shared utilities: logging setup, environment configuration, data structures
and the exception hierarchy used across the zone graph pipeline.
"""
