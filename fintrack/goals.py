"""Savings goal tracking.

``GoalTracker`` owns an in-memory collection of goals and is the only way to
create them or add contributions. The module-level functions are pure
queries over any sequence of goals: classifying a goal, filtering and
sorting a list for display, finding goals whose deadline is close and
computing overall totals.

A goal is *Completed* once its saved amount reaches the target; since
contributions never decrease the amount, that state is final. *NearDeadline*
is not stored: it is recomputed against the current date whenever a goal is
read.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
from uuid import uuid4

from .data_models import (
    GOAL_FILTERS,
    GOAL_PRIORITIES,
    GOAL_SORT_KEYS,
    DeadlineAlert,
    Goal,
    GoalEvent,
    GoalSummary,
)
from .errors import ContractViolation, GoalNotFound
from .utils import Number, days_until, parse_date, percent_of, to_decimal

logger = logging.getLogger(__name__)

ACTIVE = "Active"
NEAR_DEADLINE = "NearDeadline"
COMPLETED = "Completed"

GOAL_COMPLETED = "goal_completed"
GOAL_HALFWAY = "goal_halfway"

NEAR_DEADLINE_DAYS = 7
URGENT_PROGRESS_LIMIT = Decimal(90)
HALFWAY_PERCENT = Decimal(50)

GoalListener = Callable[[GoalEvent], None]


def is_near_deadline(goal: Goal, today: date) -> bool:
    """True when the deadline is at most a week away (or past) and under 90 % is saved."""
    return (
        days_until(goal.deadline, today) <= NEAR_DEADLINE_DAYS
        and goal.progress_percent < URGENT_PROGRESS_LIMIT
    )


def classify(goal: Goal, today: date) -> str:
    if goal.is_completed:
        return COMPLETED
    if is_near_deadline(goal, today):
        return NEAR_DEADLINE
    return ACTIVE


def list_near_deadline_goals(goals: Iterable[Goal], today: date) -> List[DeadlineAlert]:
    """Return an alert for every goal currently classified as near its deadline.

    Hosts call this on their own schedule; nothing in this package triggers it.
    """
    alerts: List[DeadlineAlert] = []
    for goal in goals:
        if not is_near_deadline(goal, today):
            continue
        days = days_until(goal.deadline, today)
        message = (
            f'Alert: "{goal.purpose}" is due in {days} days and is only '
            f"{goal.progress_percent:.1f}% complete!"
        )
        logger.info(message)
        alerts.append(DeadlineAlert(goal=goal, days_remaining=days, message=message))
    return alerts


def filter_and_sort(
    goals: Sequence[Goal],
    filter_by: str = "all",
    sort_key: str = "deadline",
    search: str = "",
    today: Optional[date] = None,
) -> List[Goal]:
    """Select and order goals for display.

    A non-empty ``search`` matches purpose or category case-insensitively and
    replaces the ``filter_by`` entirely. ``"urgent"`` selects near-deadline
    goals; ``"high"``, ``"medium"`` and ``"low"`` select by priority. Sorting
    is stable: deadline ascending, progress descending or target amount
    descending.
    """
    if filter_by not in GOAL_FILTERS:
        raise ContractViolation(f"Unknown goal filter: {filter_by}")
    if sort_key not in GOAL_SORT_KEYS:
        raise ContractViolation(f"Unknown goal sort key: {sort_key}")
    today = today or date.today()

    term = (search or "").strip().lower()
    if term:
        selected = [g for g in goals if term in g.purpose.lower() or term in g.category.lower()]
    elif filter_by == "all":
        selected = list(goals)
    elif filter_by == "urgent":
        selected = [g for g in goals if is_near_deadline(g, today)]
    else:
        selected = [g for g in goals if g.priority.lower() == filter_by]

    if sort_key == "deadline":
        return sorted(selected, key=lambda g: g.deadline)
    if sort_key == "progress":
        return sorted(selected, key=lambda g: -g.progress_percent)
    return sorted(selected, key=lambda g: -g.target_amount)


def summarize(goals: Iterable[Goal]) -> GoalSummary:
    total_saved = Decimal("0")
    total_target = Decimal("0")
    for goal in goals:
        total_saved += goal.current_amount
        total_target += goal.target_amount
    return GoalSummary(
        total_saved=total_saved,
        total_target=total_target,
        overall_progress=percent_of(total_saved, total_target),
    )


class GoalTracker:
    """In-memory collection of savings goals.

    Goals are handed out as copies, so the only way to change one is through
    ``create_goal`` and ``contribute``. Mutations hold a lock, which makes a
    single tracker safe to share between the threads of a web host.
    """

    def __init__(self, clock: Callable[[], date] = date.today) -> None:
        self._clock = clock
        self._goals: Dict[str, Goal] = {}
        self._listeners: List[GoalListener] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._goals)

    @property
    def goals(self) -> List[Goal]:
        with self._lock:
            return [replace(g) for g in self._goals.values()]

    def today(self) -> date:
        return self._clock()

    def subscribe(self, listener: GoalListener) -> None:
        """Register a callable that receives every ``GoalEvent``."""
        self._listeners.append(listener)

    def get(self, goal_id: str) -> Goal:
        with self._lock:
            goal = self._goals.get(goal_id)
            if goal is None:
                raise GoalNotFound(goal_id)
            return replace(goal)

    def create_goal(
        self,
        target_amount: Number,
        purpose: str,
        deadline: Union[str, date],
        priority: str,
        category: str,
        notes: str = "",
    ) -> Goal:
        """Start tracking a new goal with nothing saved yet.

        Raises
        ------
        ContractViolation
            If the target is not positive, the purpose or category is blank,
            the priority is unknown or the deadline is not a date.
        """
        target = to_decimal(target_amount)
        if target <= 0:
            raise ContractViolation("Goal amount must be positive")
        if not purpose or not purpose.strip():
            raise ContractViolation("Goal purpose must not be empty")
        if not category or not category.strip():
            raise ContractViolation("Goal category must not be empty")
        if priority not in GOAL_PRIORITIES:
            raise ContractViolation(f"Unknown goal priority: {priority}")
        try:
            deadline_date = parse_date(deadline)
        except ValueError as exc:
            raise ContractViolation(str(exc)) from exc

        goal = Goal(
            id=f"GOAL_{uuid4().hex[:12]}",
            target_amount=target,
            purpose=purpose.strip(),
            deadline=deadline_date,
            priority=priority,
            category=category.strip(),
            current_amount=Decimal("0"),
            start_date=self._clock(),
            notes=notes or "",
        )
        with self._lock:
            self._goals[goal.id] = goal
        logger.info("Created goal %s (%s) targeting %s by %s", goal.id, goal.purpose, target, deadline_date)
        return replace(goal)

    def contribute(self, goal_id: str, amount: Number) -> Goal:
        """Add ``amount`` to a goal, clamping the saved amount at the target.

        Listeners are notified when the goal is completed or first crosses
        the halfway mark.

        Raises
        ------
        GoalNotFound
            If no goal has ``goal_id``.
        ContractViolation
            If ``amount`` is negative.
        """
        goal, _ = self.apply_contribution(goal_id, amount)
        return goal

    def apply_contribution(self, goal_id: str, amount: Number) -> Tuple[Goal, List[GoalEvent]]:
        """Same as ``contribute`` but also returns the events it emitted."""
        value = to_decimal(amount)
        if value < 0:
            raise ContractViolation("Contribution must not be negative")

        with self._lock:
            goal = self._goals.get(goal_id)
            if goal is None:
                raise GoalNotFound(goal_id)
            previous = goal.progress_percent
            goal.current_amount = min(goal.target_amount, goal.current_amount + value)
            updated = replace(goal)

        events: List[GoalEvent] = []
        current = updated.progress_percent
        if updated.is_completed and previous < 100:
            events.append(
                GoalEvent(GOAL_COMPLETED, goal_id, f"Congratulations! You've achieved your goal: {updated.purpose}")
            )
        elif current >= HALFWAY_PERCENT and previous < HALFWAY_PERCENT:
            events.append(GoalEvent(GOAL_HALFWAY, goal_id, f"You're halfway to your goal: {updated.purpose}"))

        for event in events:
            logger.info(event.message)
            for listener in list(self._listeners):
                listener(event)
        return updated, events

    def near_deadline(self) -> List[DeadlineAlert]:
        return list_near_deadline_goals(self.goals, self._clock())

    def summary(self) -> GoalSummary:
        return summarize(self.goals)
