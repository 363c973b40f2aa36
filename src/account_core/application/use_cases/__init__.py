"""Use cases - One class per account operation, all run through TransactionalExecutor."""

from account_core.application.use_cases.deposit_cash import (
    DepositCashRequest,
    DepositCashResponse,
    DepositCashUseCase,
)
from account_core.application.use_cases.find_cash_in_out import (
    FindCashInOutRequest,
    FindCashInOutUseCase,
)
from account_core.application.use_cases.find_unprocessed_cash_out import (
    FindUnprocessedCashOutUseCase,
)
from account_core.application.use_cases.process_cash_out import (
    CancelCashOutUseCase,
    ProcessCashOutUseCase,
    SettleCashOutRequest,
    SettleCashOutResponse,
)
from account_core.application.use_cases.register_cash_out import (
    RegisterCashOutRequest,
    RegisterCashOutResponse,
    RegisterCashOutUseCase,
)
from account_core.application.use_cases.support import UseCaseSupport

__all__ = [
    "CancelCashOutUseCase",
    "DepositCashRequest",
    "DepositCashResponse",
    "DepositCashUseCase",
    "FindCashInOutRequest",
    "FindCashInOutUseCase",
    "FindUnprocessedCashOutUseCase",
    "ProcessCashOutUseCase",
    "RegisterCashOutRequest",
    "RegisterCashOutResponse",
    "RegisterCashOutUseCase",
    "SettleCashOutRequest",
    "SettleCashOutResponse",
    "UseCaseSupport",
]
