"""
Catalog layer.

Responsibilities:
- Load the catalog export of the external data store.
- Validate it into typed, immutable models.
- Answer the queries listing pages need (published, ordered, by slug).
"""
