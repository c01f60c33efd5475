"""Configuration, database handle, exceptions and logging."""
