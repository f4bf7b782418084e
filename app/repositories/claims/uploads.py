"""Upload batch repository - claim file loads and their column mappings."""

import json

from loguru import logger

from app.models.claims import ColumnMapping, UploadBatch
from app.repositories.base import BaseRepository


class UploadBatchRepository(BaseRepository):
    """Repository for upload batches."""

    def create(self, filename: str, total_rows: int) -> int:
        """Open a batch in `processing` state; returns its id."""
        row = self.fetchone(
            """
            INSERT INTO upload_batch (filename, total_rows, status)
            VALUES (?, ?, 'processing')
            RETURNING id
            """,
            [filename, total_rows],
        )
        logger.info("Upload batch {} opened: {} ({} rows)", row[0], filename, total_rows)
        return row[0]

    def get_by_id(self, batch_id: int) -> UploadBatch | None:
        row = self.fetchone(
            f"SELECT {', '.join(UploadBatch.columns())} FROM upload_batch WHERE id = ?",
            [batch_id],
        )
        return UploadBatch.from_row(row) if row else None

    def finish(
        self,
        batch_id: int,
        status: str,
        processed: int = 0,
        failed: int = 0,
        errors: list[dict] | None = None,
    ) -> None:
        """Record the outcome of a batch."""
        self.execute(
            """
            UPDATE upload_batch
            SET status = ?, processed_rows = ?, failed_rows = ?, error_log = ?, completed_at = current_timestamp
            WHERE id = ?
            """,
            [status, processed, failed, json.dumps(errors, default=str) if errors else None, batch_id],
        )
        logger.info("Upload batch {} {}: {} processed, {} failed", batch_id, status, processed, failed)

    def save_mappings(self, batch_id: int, mappings: list[ColumnMapping]) -> None:
        """Replace the stored mappings of a batch."""
        self.execute("DELETE FROM column_mapping WHERE batch_id = ?", [batch_id])
        self.db.executemany(
            "INSERT INTO column_mapping (batch_id, source_column, schema_field) VALUES (?, ?, ?)",
            [[batch_id, m.source_column, m.schema_field] for m in mappings],
        )

    def mappings(self, batch_id: int) -> list[ColumnMapping]:
        """Mappings stored with a batch, in insertion order."""
        rows = self.fetchall(
            "SELECT source_column, schema_field FROM column_mapping WHERE batch_id = ? ORDER BY id",
            [batch_id],
        )
        return [ColumnMapping(r[0], r[1]) for r in rows]
