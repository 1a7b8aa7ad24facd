"""FastAPI application module for Atelier.

This module contains the FastAPI application, route handlers, and API
endpoints for the recommendation service. It exposes the personalized
recommendation rail, catalog browsing and style-quiz preference storage.
"""
