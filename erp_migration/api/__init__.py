"""HTTP API for the migration runtime."""
