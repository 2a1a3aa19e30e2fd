"""Session context for a single invocation."""

from pydantic import BaseModel, ConfigDict, Field

from expense_tracker.config import DEFAULT_DB_FILENAME


class Session(BaseModel):
    """
    Who is running the program and with what privilege.

    Built once by the authorization gate and never changed afterwards.
    """

    model_config = ConfigDict(frozen=True)

    acting_username: str = Field(
        ...,
        min_length=1,
        description="OS account that invoked the program"
    )
    admin: bool = Field(
        default=False,
        description="Set only after a successful credential check"
    )
    db_path: str = Field(
        default=DEFAULT_DB_FILENAME,
        min_length=1,
        description="Database file for this invocation"
    )
