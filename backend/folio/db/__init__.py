"""Database metadata - shared declarative Base for all ORM models."""
