"""Infrastructure: Redis cache, SQL persistence, token verification."""
