"""Middleware package."""
