"""
Command Handlers

Executes a parsed request against storage. Mutations and their audit
entries are written in one transaction: either both land or neither.
"""

import time
from typing import Callable, Union

from pydantic import BaseModel, ConfigDict

from expense_tracker.audit import AuditLogger
from expense_tracker.commands.arguments import (
    AddRequest,
    CommandRequest,
    DeleteRequest,
    ListRequest,
    ListUsersRequest,
)
from expense_tracker.models.expense import Expense
from expense_tracker.models.session import Session
from expense_tracker.services.storage import ExpenseStorageInterface
from expense_tracker.utils.logger import get_logger


logger = get_logger(__name__)


class AddResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    expense_id: int
    username: str


class DeleteResult(BaseModel):
    """Outcome of a delete; `deleted` is False when no row matched."""
    model_config = ConfigDict(frozen=True)

    expense_id: int
    username: str
    deleted: bool


class ListResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    expenses: list[Expense]


class ListUsersResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    usernames: list[str]


CommandResult = Union[AddResult, DeleteResult, ListResult, ListUsersResult]


class CommandHandlers:
    """
    Runs the four commands for one session.

    The target username has already been resolved into each request;
    the session contributes only the admin flag recorded in the audit log.
    """

    def __init__(
        self,
        session: Session,
        expenses: ExpenseStorageInterface,
        audit_logger: AuditLogger,
        clock: Callable[[], float] = time.time,
    ):
        self._session = session
        self._expenses = expenses
        self._audit = audit_logger
        self._clock = clock

    def execute(self, request: CommandRequest) -> CommandResult:
        if isinstance(request, AddRequest):
            return self.add(request)
        if isinstance(request, ListRequest):
            return self.list_expenses(request)
        if isinstance(request, DeleteRequest):
            return self.delete(request)
        if isinstance(request, ListUsersRequest):
            return self.list_users(request)
        raise TypeError(f"Unsupported request: {type(request).__name__}")

    def add(self, request: AddRequest) -> AddResult:
        """
        Insert an expense for the target user, then audit it.

        Raises:
            StorageQueryError: If the insert fails (nothing is audited)
            AuditWriteError: If the audit entry fails (the insert is rolled back)
        """
        now = int(self._clock())
        with self._expenses.transaction():
            expense_id = self._expenses.add_expense(
                time=now,
                username=request.username,
                description=request.description,
                amount=request.amount,
            )
            self._audit.log_expense_added(
                admin=self._session.admin,
                username=request.username,
                description=request.description,
                amount=request.raw_amount,
                time=now,
            )

        logger.info(
            "expense_added",
            expense_id=expense_id,
            username=request.username,
            admin=self._session.admin,
        )
        return AddResult(expense_id=expense_id, username=request.username)

    def list_expenses(self, request: ListRequest) -> ListResult:
        expenses = self._expenses.list_expenses(request.username)
        return ListResult(username=request.username, expenses=expenses)

    def delete(self, request: DeleteRequest) -> DeleteResult:
        """
        Delete the target user's expense with the given id, then audit it.

        Deleting an id that does not exist (or belongs to someone else)
        is not an error; it is still audited.
        """
        now = int(self._clock())
        with self._expenses.transaction():
            deleted = self._expenses.delete_expense(
                username=request.username,
                expense_id=request.expense_id,
            )
            self._audit.log_expense_deleted(
                admin=self._session.admin,
                username=request.username,
                expense_id=request.raw_id,
                time=now,
            )

        logger.info(
            "expense_deleted",
            expense_id=request.expense_id,
            username=request.username,
            admin=self._session.admin,
            rows=deleted,
        )
        return DeleteResult(
            expense_id=request.expense_id,
            username=request.username,
            deleted=deleted > 0,
        )

    def list_users(self, request: ListUsersRequest) -> ListUsersResult:
        return ListUsersResult(usernames=self._expenses.list_users())
