"""Person service: CRUD over ``Person`` with query-string filtering."""

from __future__ import annotations

__version__ = "0.1.0"
