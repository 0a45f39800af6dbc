"""
Pydantic schema definitions for API payloads.

Each domain (accounts, posts) defines its own request and response
models.  Schemas are separated from the database layer to decouple
the API representation from persistence.
"""
