"""Claims repository - claim storage and per-subject aggregations."""

from datetime import date

from loguru import logger

from app.models.analytics import AnalyticsSubject, SubjectKind
from app.repositories.base import BaseRepository

# subject kind -> (own column, counterpart table, counterpart column)
_SUBJECT_COLUMNS = {
    SubjectKind.PAYER: ("payer_id", "provider", "provider_id"),
    SubjectKind.PROVIDER: ("provider_id", "payer", "payer_id"),
    SubjectKind.SCHEME: ("scheme_id", "provider", "provider_id"),
}

INSERT_COLUMNS = (
    "claim_number",
    "member_number",
    "patient_name",
    "provider_id",
    "payer_id",
    "scheme_id",
    "service_date",
    "claim_date",
    "invoice_amount_cents",
    "approved_amount_cents",
    "status",
    "diagnosis_code",
    "procedure_code",
    "upload_batch_id",
)


def _breakdown_rows(rows: list, id_key: str) -> list[dict]:
    return [
        {
            id_key: r[0],
            "name": r[1],
            "claims": int(r[2]),
            "invoice_cents": int(r[3]),
            "approved_cents": int(r[4]),
        }
        for r in rows
    ]


class ClaimsRepository(BaseRepository):
    """Repository for claim data access."""

    def totals(self, subject: AnalyticsSubject) -> dict[str, int]:
        """Claim count and summed amounts for a subject."""
        column = _SUBJECT_COLUMNS[subject.kind][0]
        row = self.fetchone(
            f"""
            SELECT COUNT(*),
                   COALESCE(SUM(invoice_amount_cents), 0),
                   COALESCE(SUM(approved_amount_cents), 0)
            FROM claim
            WHERE {column} = ?
            """,
            [subject.id],
        )
        return {
            "total_claims": int(row[0]),
            "total_invoice_cents": int(row[1]),
            "total_approved_cents": int(row[2]),
        }

    def counterpart_breakdown(self, subject: AnalyticsSubject, limit: int = 10) -> list[dict]:
        """Top providers of a payer or scheme, or top payers of a provider."""
        column, table, counterpart = _SUBJECT_COLUMNS[subject.kind]
        rows = self.fetchall(
            f"""
            SELECT e.id, e.name,
                   COUNT(c.id) AS claims,
                   COALESCE(SUM(c.invoice_amount_cents), 0) AS invoice_cents,
                   COALESCE(SUM(c.approved_amount_cents), 0) AS approved_cents
            FROM claim c
            JOIN {table} e ON c.{counterpart} = e.id
            WHERE c.{column} = ?
            GROUP BY e.id, e.name
            ORDER BY claims DESC, invoice_cents DESC, e.id
            LIMIT ?
            """,
            [subject.id, limit],
        )
        return _breakdown_rows(rows, f"{table}_id")

    def scheme_breakdown(self, subject: AnalyticsSubject, limit: int = 10) -> list[dict]:
        """Top schemes for a subject."""
        column = _SUBJECT_COLUMNS[subject.kind][0]
        rows = self.fetchall(
            f"""
            SELECT s.id, s.name,
                   COUNT(c.id) AS claims,
                   COALESCE(SUM(c.invoice_amount_cents), 0) AS invoice_cents,
                   COALESCE(SUM(c.approved_amount_cents), 0) AS approved_cents
            FROM claim c
            JOIN scheme s ON c.scheme_id = s.id
            WHERE c.{column} = ? AND c.scheme_id IS NOT NULL
            GROUP BY s.id, s.name
            ORDER BY claims DESC, invoice_cents DESC, s.id
            LIMIT ?
            """,
            [subject.id, limit],
        )
        return _breakdown_rows(rows, "scheme_id")

    def monthly_trends(self, subject: AnalyticsSubject, since: date) -> list[dict]:
        """Per-month claim volume since a date, newest month first."""
        column = _SUBJECT_COLUMNS[subject.kind][0]
        rows = self.fetchall(
            f"""
            SELECT strftime(date_trunc('month', service_date), '%Y-%m') AS month,
                   COUNT(*) AS claims,
                   COALESCE(SUM(invoice_amount_cents), 0) AS invoice_cents,
                   COALESCE(SUM(approved_amount_cents), 0) AS approved_cents
            FROM claim
            WHERE {column} = ? AND service_date >= ?
            GROUP BY month
            ORDER BY month DESC
            """,
            [subject.id, since],
        )
        return [
            {
                "month": r[0],
                "claims": int(r[1]),
                "invoice_cents": int(r[2]),
                "approved_cents": int(r[3]),
            }
            for r in rows
        ]

    def claim_numbers(self) -> set[str]:
        """All stored claim numbers (duplicate detection during ingestion)."""
        return {r[0] for r in self.fetchall("SELECT claim_number FROM claim")}

    def insert_many(self, claims: list[dict]) -> int:
        """Insert claim rows keyed by INSERT_COLUMNS."""
        if not claims:
            return 0

        placeholders = ", ".join("?" for _ in INSERT_COLUMNS)
        self.db.executemany(
            f"INSERT INTO claim ({', '.join(INSERT_COLUMNS)}) VALUES ({placeholders})",
            [[c.get(col) for col in INSERT_COLUMNS] for c in claims],
        )
        logger.debug("Inserted {} claims", len(claims))
        return len(claims)
