"""SQL persistence: engine/session factory, ORM models, repositories."""
