"""Dependency injection wiring."""

from .container import Container

__all__ = ['Container']
