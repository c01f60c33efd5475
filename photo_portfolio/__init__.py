"""Portfolio photo metadata: store, queries, validation and bulk mutations."""

__version__ = "1.0.0"
