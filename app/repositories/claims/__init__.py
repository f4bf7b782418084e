"""Claims repositories."""

from app.repositories.claims.claims import INSERT_COLUMNS, ClaimsRepository
from app.repositories.claims.uploads import UploadBatchRepository

__all__ = ["ClaimsRepository", "INSERT_COLUMNS", "UploadBatchRepository"]
