"""Shared request/response schemas."""
