"""Shared types, configuration and helpers for the Vision client."""
