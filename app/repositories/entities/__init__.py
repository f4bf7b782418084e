"""Entity repositories."""

from app.repositories.entities.entity import (
    EntityRepository,
    PayerRepository,
    ProviderRepository,
    SchemeRepository,
)

__all__ = [
    "EntityRepository",
    "PayerRepository",
    "ProviderRepository",
    "SchemeRepository",
]
