"""Error kinds shared by the calculators.

Expected, user-facing problems with input are described by a ``Rejection``
value returned from the validator; it is never raised. Programmer errors,
such as handing an engine a non-positive tenure after skipping validation,
raise ``ContractViolation``.
"""

from __future__ import annotations

from dataclasses import dataclass

NOT_A_NUMBER = "not_a_number"
OUT_OF_RANGE = "out_of_range"
INVALID_CHOICE = "invalid_choice"
REQUIRED = "required"
INVALID_DATE = "invalid_date"


@dataclass(frozen=True)
class Rejection:
    """A validation failure that the caller must surface to the user.

    Attributes
    ----------
    kind: str
        The input kind that was validated (``"salary"``, ``"tenure"``...).
    code: str
        Machine-readable reason: ``not_a_number``, ``out_of_range``,
        ``invalid_choice``, ``required`` or ``invalid_date``.
    reason: str
        Human-readable message suitable for display.
    """

    kind: str
    code: str
    reason: str

    def __bool__(self) -> bool:
        return False


class ContractViolation(ValueError):
    """Raised when an engine receives input that validation should have stopped."""


class GoalNotFound(LookupError):
    """Raised when a goal id is not tracked."""

    def __init__(self, goal_id: str) -> None:
        super().__init__(f"Goal not found: {goal_id}")
        self.goal_id = goal_id
