"""Atelier: style-quiz product recommendations for a fashion storefront.

This package provides the backend service that personalizes the
"Recommended for You" rail by scoring catalog products against a shopper's
style-quiz answers.

Modules:
    api: FastAPI application and REST API endpoints
    recommender: catalog/preference stores, scoring and ranking logic
"""

__version__ = "0.2.0"
