"""Entity repositories - payers, providers and their schemes."""

from typing import ClassVar

from loguru import logger

from app.models import Payer, Provider, Scheme
from app.models.common import BaseEntity
from app.repositories.base import BaseRepository


class EntityRepository(BaseRepository):
    """Lookup and creation for one entity table."""

    table: ClassVar[str]
    entity: ClassVar[type[BaseEntity]]

    def _select(self) -> str:
        return f"SELECT {', '.join(self.entity.columns())} FROM {self.table}"

    def get_by_id(self, entity_id: int) -> BaseEntity | None:
        row = self.fetchone(f"{self._select()} WHERE id = ?", [entity_id])
        return self.entity.from_row(row) if row else None

    def get_by_name(self, name: str) -> BaseEntity | None:
        row = self.fetchone(f"{self._select()} WHERE name = ?", [name])
        return self.entity.from_row(row) if row else None

    def exists(self, entity_id: int) -> bool:
        row = self.fetchone(f"SELECT COUNT(*) FROM {self.table} WHERE id = ?", [entity_id])
        return row[0] > 0

    def list_ids(self) -> list[int]:
        """All ids, ascending."""
        rows = self.fetchall(f"SELECT id FROM {self.table} ORDER BY id")
        return [r[0] for r in rows]

    def create(self, name: str, **extra) -> int:
        """Insert a row and return its id."""
        cols = ["name", *extra]
        placeholders = ", ".join("?" for _ in cols)
        row = self.fetchone(
            f"INSERT INTO {self.table} ({', '.join(cols)}) VALUES ({placeholders}) RETURNING id",
            [name, *extra.values()],
        )
        logger.info("Created {} {}: {}", self.table, row[0], name)
        return row[0]

    def get_or_create(self, name: str, **scope) -> int:
        """Id of the row with this name (within `scope` columns), creating it on first sight."""
        where = " AND ".join(f"{col} = ?" for col in ["name", *scope])
        row = self.fetchone(f"SELECT id FROM {self.table} WHERE {where}", [name, *scope.values()])
        if row:
            return row[0]
        return self.create(name, **scope)


class PayerRepository(EntityRepository):
    """Repository for payers."""

    table = "payer"
    entity = Payer


class ProviderRepository(EntityRepository):
    """Repository for providers."""

    table = "provider"
    entity = Provider


class SchemeRepository(EntityRepository):
    """Repository for payer schemes (unique per payer + name).

    Create through `get_or_create(name, payer_id=...)`.
    """

    table = "scheme"
    entity = Scheme
