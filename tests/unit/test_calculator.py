"""Tests for the analytics calculator."""

from datetime import date, datetime, timezone

import pytest

from app.errors import NotFoundError
from app.models.analytics import AnalyticsSubject, SubjectKind
from app.repositories import ClaimsRepository, PayerRepository, ProviderRepository, SchemeRepository
from app.services.analytics import AnalyticsCalculator, approval_rate

NOW = datetime(2025, 6, 15, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def calculator(db):
    return AnalyticsCalculator(
        claims_repo=ClaimsRepository(),
        entity_repos={
            SubjectKind.PAYER: PayerRepository(),
            SubjectKind.PROVIDER: ProviderRepository(),
            SubjectKind.SCHEME: SchemeRepository(),
        },
        clock=lambda: NOW,
    )


class TestApprovalRate:
    def test_rounds_to_two_decimals(self):
        assert approval_rate(3_000, 1_000) == 33.33

    def test_zero_invoice(self):
        assert approval_rate(0, 0) == 0.0

    def test_full(self):
        assert approval_rate(500, 500) == 100.0


class TestCalculator:
    def test_missing_subject(self, calculator):
        with pytest.raises(NotFoundError, match="Payer not found"):
            calculator.compute(AnalyticsSubject(SubjectKind.PAYER, 99))

    def test_payer_body(self, calculator, db, claim_factory):
        payer = PayerRepository().create("Jubilee")
        clinic = ProviderRepository().create("Clinic A")
        claim_factory("A-1", payer, clinic, 10_000, approved_cents=7_500, service_date=date(2025, 6, 1))
        claim_factory("A-2", payer, clinic, 10_000, approved_cents=10_000, service_date=date(2025, 5, 2))
        claim_factory("A-3", payer, clinic, 5_000, service_date=date(2023, 1, 1))

        body = calculator.compute(AnalyticsSubject(SubjectKind.PAYER, payer))

        assert body["total_claims"] == 3
        assert body["total_invoice_cents"] == 25_000
        assert body["total_approved_cents"] == 17_500
        assert body["approval_rate"] == 70.0
        assert [p["provider_id"] for p in body["top_providers"]] == [clinic]
        assert "top_payers" not in body
        assert body["top_schemes"] == []
        assert [t["month"] for t in body["monthly_trends"]] == ["2025-06", "2025-05"]

    def test_provider_body_uses_top_payers(self, calculator, seeded):
        body = calculator.compute(AnalyticsSubject(SubjectKind.PROVIDER, seeded["clinic_b"]))

        assert body["total_claims"] == 1
        assert body["approval_rate"] == 0.0
        assert [p["name"] for p in body["top_payers"]] == ["Jubilee"]
        assert "top_providers" not in body

    def test_subject_without_claims(self, calculator, db):
        provider = ProviderRepository().create("New Clinic")
        body = calculator.compute(AnalyticsSubject(SubjectKind.PROVIDER, provider))

        assert body["total_claims"] == 0
        assert body["top_payers"] == []
        assert body["monthly_trends"] == []

    def test_scheme_body_lists_providers(self, calculator, seeded):
        body = calculator.compute(AnalyticsSubject(SubjectKind.SCHEME, seeded["gold"]))

        assert body["total_claims"] == 2
        assert body["total_invoice_cents"] == 15_000
        assert body["approval_rate"] == 86.67
        assert [p["name"] for p in body["top_providers"]] == ["Clinic A"]
        assert "top_schemes" not in body
        assert "top_payers" not in body

    def test_missing_scheme(self, calculator, seeded):
        with pytest.raises(NotFoundError, match="Scheme not found"):
            calculator.compute(AnalyticsSubject(SubjectKind.SCHEME, seeded["gold"] + 1))
