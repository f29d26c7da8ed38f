"""Application ports package."""

from .database import DatabaseEnginePort
from .goal_repository import GoalRepositoryPort
from .investment_repository import InvestmentRepositoryPort
from .investor_repository import InvestorRecord, InvestorRepositoryPort
from .transaction_repository import TransactionRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "GoalRepositoryPort",
    "InvestmentRepositoryPort",
    "InvestorRecord",
    "InvestorRepositoryPort",
    "TransactionRepositoryPort",
]
