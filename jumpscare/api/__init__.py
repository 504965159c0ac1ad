"""HTTP surface over the jump scare backend."""

from .server import create_app

__all__ = ['create_app']
