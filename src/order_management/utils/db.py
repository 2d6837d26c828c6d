"""Database schema management for relational providers.

Only acts on ``sqlite`` and ``postgresql`` providers; the in-memory provider
needs no schema.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _register_models(domain: Domain, provider) -> None:
    # Touching ``_dao`` registers each model with the provider's metadata
    for _, record in domain.registry.aggregates.items():
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018

    for _, record in domain.registry.entities.items():
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def relational_providers(domain: Domain) -> list:
    return [
        provider for _, provider in domain.providers.items() if provider.conn_info["provider"] in _RELATIONAL_PROVIDERS
    ]


def setup_db(domain: Domain) -> int:
    """Create tables for every relational provider. Returns the provider count."""
    with domain.domain_context():
        providers = relational_providers(domain)
        for provider in providers:
            engine = create_engine(provider.conn_info["database_uri"])
            _register_models(domain, provider)
            provider._metadata.create_all(engine)
        return len(providers)


def drop_db(domain: Domain) -> int:
    """Drop tables for every relational provider. Returns the provider count."""
    with domain.domain_context():
        providers = relational_providers(domain)
        for provider in providers:
            engine = create_engine(provider.conn_info["database_uri"])
            _register_models(domain, provider)
            provider._metadata.drop_all(engine)
        return len(providers)
