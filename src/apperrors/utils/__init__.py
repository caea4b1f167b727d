"""Utilities for the FastAPI application."""
