"""Pydantic schemas for findings and engine results."""
