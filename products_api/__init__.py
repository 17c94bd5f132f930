# products_api/__init__.py

"""Products REST API service."""
