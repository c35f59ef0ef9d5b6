"""
Pydantic schema definitions for API payloads.

Schemas are separated from the persistence code so that the API
representation does not depend on the table layout.
"""
