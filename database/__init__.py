"""Persistence: ORM models, session factory and stores."""
