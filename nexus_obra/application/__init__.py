"""Application layer: use-case services and DTOs (no HTTP, no ORM imports)."""
