"""Recommendation module for Atelier.

This module contains the product and preference models, the file-backed
catalog and preference stores, the rule-based match scorer and the ranking
functions that turn a catalog into the "Recommended for You" rail.
"""
