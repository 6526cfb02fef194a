"""Database base, session factory, enums and ORM models."""
