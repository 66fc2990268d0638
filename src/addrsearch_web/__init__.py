"""Flask front end over the address search Engine."""
from __future__ import annotations
from .web import app, main

__all__ = ["app", "main"]
