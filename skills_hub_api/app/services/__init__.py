"""
Service layer abstraction.

Each service wraps the record store for one domain and converts
records to API schemas.  The query engine holds the read-only
matching and category lookup functions.
"""
