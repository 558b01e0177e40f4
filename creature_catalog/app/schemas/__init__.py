"""
Pydantic schema definitions for API payloads.

Schemas are separated from the store layout to decouple the API
representation from persistence.
"""
