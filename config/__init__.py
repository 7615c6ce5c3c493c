# -*- coding: utf-8 -*-
"""Static configuration modules."""
