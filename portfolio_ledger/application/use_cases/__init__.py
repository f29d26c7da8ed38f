"""Application use cases package."""

from .calculate_goal_projection import CalculateGoalProjectionUseCase
from .change_goal_status import ChangeGoalStatusUseCase
from .correct_transaction import (
    CorrectTransactionResult,
    CorrectTransactionUseCase,
)
from .edit_goal import EditGoalUseCase
from .fetch_transactions_history import FetchTransactionsHistoryUseCase
from .preview_transaction import PreviewTransactionUseCase
from .rebuild_position import (
    PositionChange,
    RebuildPositionResult,
    RebuildPositionUseCase,
)
from .rebuild_positions import (
    RebuildFailure,
    RebuildPositionsResult,
    RebuildPositionsUseCase,
)
from .record_transaction import (
    RecordTransactionRequest,
    RecordTransactionResult,
    RecordTransactionUseCase,
)
from .register_goal import RegisterGoalRequest, RegisterGoalUseCase
from .update_goal_progress import UpdateGoalProgressUseCase

__all__ = [
    "CalculateGoalProjectionUseCase",
    "ChangeGoalStatusUseCase",
    "CorrectTransactionResult",
    "CorrectTransactionUseCase",
    "EditGoalUseCase",
    "FetchTransactionsHistoryUseCase",
    "PreviewTransactionUseCase",
    "PositionChange",
    "RebuildPositionResult",
    "RebuildPositionUseCase",
    "RebuildFailure",
    "RebuildPositionsResult",
    "RebuildPositionsUseCase",
    "RecordTransactionRequest",
    "RecordTransactionResult",
    "RecordTransactionUseCase",
    "RegisterGoalRequest",
    "RegisterGoalUseCase",
    "UpdateGoalProgressUseCase",
]
