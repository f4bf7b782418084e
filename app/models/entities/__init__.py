"""Entity models - payers, providers, schemes."""

from app.models.entities.payer import PAYER_DDL, PAYER_SEQ_DDL, Payer
from app.models.entities.provider import PROVIDER_DDL, PROVIDER_SEQ_DDL, Provider
from app.models.entities.scheme import SCHEME_DDL, SCHEME_SEQ_DDL, Scheme

__all__ = [
    "PAYER_SEQ_DDL",
    "PAYER_DDL",
    "PROVIDER_SEQ_DDL",
    "PROVIDER_DDL",
    "SCHEME_SEQ_DDL",
    "SCHEME_DDL",
    "Payer",
    "Provider",
    "Scheme",
]
