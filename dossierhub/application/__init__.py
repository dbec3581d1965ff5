"""Application layer: DTOs, ports, workflow services and use cases."""
