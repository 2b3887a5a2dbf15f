"""
Cost Pricing Package

A cost-allocation pricing engine for small-business product catalogs.
Resolves per-product prices using Costs → Revenue Target → Allocation → Price pipeline.
"""

__version__ = "1.0.0"
