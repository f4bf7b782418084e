"""Analytics calculator - aggregates claims into a subject's 360 analytics."""

from collections.abc import Callable
from datetime import datetime

from loguru import logger

from app.errors import NotFoundError
from app.models.analytics import AnalyticsSubject, SubjectKind
from app.repositories.claims import ClaimsRepository
from app.repositories.entities import EntityRepository
from app.services.analytics.clock import trend_start, utcnow
from settings import TOP_LIMIT, TREND_MONTHS

# Breakdown key per subject kind: payers and schemes list providers, providers list payers
COUNTERPART_KEYS = {
    SubjectKind.PAYER: "top_providers",
    SubjectKind.PROVIDER: "top_payers",
    SubjectKind.SCHEME: "top_providers",
}


def approval_rate(invoice_cents: int, approved_cents: int) -> float:
    """Approved share of invoiced amount, percent with 2 decimals."""
    if invoice_cents <= 0:
        return 0.0
    return round(approved_cents / invoice_cents * 100, 2)


class AnalyticsCalculator:
    """Recomputes analytics bodies from the claims table."""

    def __init__(
        self,
        claims_repo: ClaimsRepository,
        entity_repos: dict[SubjectKind, EntityRepository],
        top_limit: int = TOP_LIMIT,
        trend_months: int = TREND_MONTHS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._claims = claims_repo
        self._entities = entity_repos
        self._top_limit = top_limit
        self._trend_months = trend_months
        self._clock = clock

    def compute(self, subject: AnalyticsSubject) -> dict:
        """Full analytics body for a subject; NotFoundError if it does not exist."""
        if not self._entities[subject.kind].exists(subject.id):
            raise NotFoundError(f"{subject.kind.label} not found")

        totals = self._claims.totals(subject)
        since = trend_start(self._clock().date(), self._trend_months)

        body = {
            **totals,
            "approval_rate": approval_rate(totals["total_invoice_cents"], totals["total_approved_cents"]),
            COUNTERPART_KEYS[subject.kind]: self._claims.counterpart_breakdown(subject, self._top_limit),
            "monthly_trends": self._claims.monthly_trends(subject, since),
        }
        if subject.kind is not SubjectKind.SCHEME:
            body["top_schemes"] = self._claims.scheme_breakdown(subject, self._top_limit)

        logger.info("Computed analytics for {}: {} claims", subject, totals["total_claims"])
        return body
