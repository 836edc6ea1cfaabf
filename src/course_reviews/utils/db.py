"""Schema and data management for the Course Reviews persistence providers.

Only relational providers (SQLite, PostgreSQL) have a schema to create or
drop; the in-memory provider used in development and tests needs neither.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in RELATIONAL_PROVIDERS:
            yield provider


def _persisted_classes(domain: Domain):
    """Aggregates, child entities and projections, each of which owns a table."""
    for records in (
        domain.registry.aggregates,
        domain.registry.entities,
        domain.registry.projections,
    ):
        for _, record in records.items():
            yield record.cls


def setup_db(domain: Domain):
    """Create tables for every persisted class on every relational provider."""
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Touching the DAO registers the SQLAlchemy model with the provider's metadata
            for cls in _persisted_classes(domain):
                if cls.meta_.provider == provider.name:
                    domain.repository_for(cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop all tables on every relational provider."""
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)


def reset_data(domain: Domain):
    """Clear every provider and the event store of the active domain."""
    for _, provider in domain.providers.items():
        provider._data_reset()

    domain.event_store.store._data_reset()
