"""Infrastructure adapters (database, logging, metrics)."""
