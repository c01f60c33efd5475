"""ORM models and Pydantic schemas."""
