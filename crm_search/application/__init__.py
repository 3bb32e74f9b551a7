"""Application layer: DTOs, ports, pure services, and use cases."""
