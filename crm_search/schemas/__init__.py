"""API request/response schemas (pydantic). JSON fields are camelCase."""
