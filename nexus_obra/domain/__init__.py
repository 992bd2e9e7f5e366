"""Domain layer: enums, exceptions and access policy (no framework imports)."""
