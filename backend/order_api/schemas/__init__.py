"""Pydantic Schemas — request and document shapes."""
