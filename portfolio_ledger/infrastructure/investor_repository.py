"""SQLAlchemy-backed repository for investors."""

from dataclasses import asdict

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from portfolio_ledger.application.ports.database import DatabaseEnginePort
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRecord,
    InvestorRepositoryPort,
)
from portfolio_ledger.domain.errors import ConflictError, DomainError

SELECT_INVESTOR_SQL = text(
    """
    SELECT id, name, email
    FROM investors
    WHERE id = :id
    """
)

INSERT_INVESTOR_SQL = text(
    """
    INSERT INTO investors (id, name, email)
    VALUES (:id, :name, :email)
    """
)


class SqlAlchemyInvestorRepository(InvestorRepositoryPort):
    """Repository backed by SQLAlchemy for investors."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def find_by_id(self, investor_id: str) -> InvestorRecord | None:
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(SELECT_INVESTOR_SQL, {"id": investor_id}).first()
        if row is None:
            return None
        return InvestorRecord(id=row.id, name=row.name, email=row.email)

    def create(self, investor: InvestorRecord) -> DomainError | None:
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(INSERT_INVESTOR_SQL, asdict(investor))
        except IntegrityError:
            return ConflictError(
                "Investor already exists.",
                details={"investor_id": investor.id, "email": investor.email},
            )
        return None


__all__ = ["SqlAlchemyInvestorRepository"]
