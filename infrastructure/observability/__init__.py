"""Tracing shared by every app."""
