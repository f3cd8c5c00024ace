"""Schema management for the SQLite configuration in ``domain.toml``.

The memory provider used in development and tests keeps no schema, so both
helpers skip it and report that no table was touched.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite",)
PERSISTED_ELEMENTS = ("aggregates", "entities", "projections")


def _sql_providers(domain: Domain):
    for provider in domain.providers.values():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider, create_engine(provider.conn_info["database_uri"])


def _register_models(domain: Domain, provider) -> None:
    # A repository's `_dao` builds the SQLAlchemy model into the provider's metadata
    for element in PERSISTED_ELEMENTS:
        for record in getattr(domain.registry, element).values():
            if record.cls.meta_.provider == provider.name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> list[str]:
    """Create marketplace tables. Returns the names of the tables created."""
    created = []
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            _register_models(domain, provider)
            provider._metadata.create_all(engine)
            created.extend(provider._metadata.tables)
    return sorted(created)


def drop_db(domain: Domain) -> list[str]:
    """Drop marketplace tables. Returns the names of the tables dropped."""
    dropped = []
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            provider._metadata.drop_all(engine)
            dropped.extend(provider._metadata.tables)
    return sorted(dropped)
