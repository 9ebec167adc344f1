# src/piazza/schemas/__init__.py
"""Pydantic schemas for request and response bodies."""
