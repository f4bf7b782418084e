"""Shared fixtures: in-memory DuckDB and seeded claims."""

from datetime import date

import pytest

from app.repositories import ClaimsRepository, PayerRepository, ProviderRepository, SchemeRepository
from app.repositories.db import close_db, connect


@pytest.fixture
def db():
    """Fresh in-memory database as the process database."""
    close_db()
    conn = connect(":memory:")
    yield conn
    close_db()


def add_claim(
    conn,
    number: str,
    payer_id: int,
    provider_id: int,
    invoice_cents: int,
    approved_cents: int | None = None,
    service_date: date | None = None,
    scheme_id: int | None = None,
) -> None:
    ClaimsRepository(conn).insert_many(
        [
            {
                "claim_number": number,
                "payer_id": payer_id,
                "provider_id": provider_id,
                "scheme_id": scheme_id,
                "invoice_amount_cents": invoice_cents,
                "approved_amount_cents": approved_cents,
                "service_date": service_date or date.today(),
                "status": "Pending",
            }
        ]
    )


@pytest.fixture
def seeded(db):
    """Two payers, two providers, one scheme, four claims dated today.

    payer 1 (Jubilee): provider A x2, provider B x1; payer 2 (AAR): provider A x1.
    """
    payers = PayerRepository(db)
    providers = ProviderRepository(db)
    jubilee = payers.create("Jubilee", type="private")
    aar = payers.create("AAR")
    clinic_a = providers.create("Clinic A", location="Nairobi")
    clinic_b = providers.create("Clinic B")
    gold = SchemeRepository(db).get_or_create("Gold", payer_id=jubilee)

    add_claim(db, "C-1", jubilee, clinic_a, 10_000, 8_000, scheme_id=gold)
    add_claim(db, "C-2", jubilee, clinic_a, 5_000, 5_000, scheme_id=gold)
    add_claim(db, "C-3", jubilee, clinic_b, 2_000, None)
    add_claim(db, "C-4", aar, clinic_a, 4_000, 1_000)

    return {
        "conn": db,
        "jubilee": jubilee,
        "aar": aar,
        "clinic_a": clinic_a,
        "clinic_b": clinic_b,
        "gold": gold,
    }


@pytest.fixture
def claim_factory(db):
    """add_claim bound to the test database."""

    def make(number: str, payer_id: int, provider_id: int, invoice_cents: int, **kwargs) -> None:
        add_claim(db, number, payer_id, provider_id, invoice_cents, **kwargs)

    return make
