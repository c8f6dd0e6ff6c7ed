"""SQLAlchemy and in-memory storage for persons."""

from .compiler import apply_page_request, build_sqla_filter, ranked
from .memory import InMemoryPersonRepository
from .models import Base, PersonModel, resolve_column
from .repository import SQLAlchemyPersonRepository
from .seed import SEED_PERSONS, seed_database
from .session import build_engine, build_session_factory, create_tables, session_scope
from .strategy import (
    DEFAULT_SQLA_REGISTRY,
    SQLAlchemyOperator,
    SQLAlchemyOperatorRegistry,
    build_default_sqla_registry,
)

__all__ = [
    "Base",
    "PersonModel",
    "resolve_column",
    "build_sqla_filter",
    "apply_page_request",
    "ranked",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    "SQLAlchemyPersonRepository",
    "InMemoryPersonRepository",
    "SEED_PERSONS",
    "seed_database",
    "build_engine",
    "build_session_factory",
    "create_tables",
    "session_scope",
]
