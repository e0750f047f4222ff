"""
CompensatingWorkflow - Exécution d'étapes ordonnées avec annulation en cas d'échec

Chaque étape est un couple (action, compensation). Les étapes s'exécutent
dans l'ordre ; si une étape échoue, les compensations des étapes déjà
terminées sont exécutées en ordre inverse, puis l'erreur d'origine est
relancée. Une compensation qui échoue est journalisée et ne masque jamais
l'erreur d'origine.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from domain.exceptions import WorkflowCancelledError

logger = logging.getLogger(__name__)


class WorkflowState(str, Enum):
    """États d'un workflow de création"""
    START = "start"
    ACCOUNT_CREATED = "account_created"
    PROFILE_CREATED = "profile_created"
    ASSOCIATED = "associated"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class WorkflowStep:
    """Une étape du workflow et son action de compensation"""
    name: str
    action: Callable[[], None]
    reached: WorkflowState
    compensation: Optional[Callable[[], None]] = None


class CompensatingWorkflow:
    """Exécute une liste d'étapes et compense en cas d'échec"""

    def __init__(self, name: str, steps: Sequence[WorkflowStep]):
        self.name = name
        self.steps = list(steps)
        self.state = WorkflowState.START
        self.completed: List[WorkflowStep] = []

    def run(self, cancel_event: Optional[threading.Event] = None) -> WorkflowState:
        """
        Exécute toutes les étapes.

        Args:
            cancel_event: Signal d'annulation vérifié avant chaque étape

        Returns:
            WorkflowState.COMMITTED si toutes les étapes ont réussi

        Raises:
            WorkflowCancelledError: Si l'annulation est demandée entre deux étapes
            Exception: L'erreur de l'étape en échec, après compensation
        """
        for step in self.steps:
            if cancel_event is not None and cancel_event.is_set():
                logger.warning(f"[{self.name}] Cancelled before step '{step.name}'")
                self._rollback()
                raise WorkflowCancelledError(self.name, step.name)

            try:
                step.action()
            except Exception as e:
                logger.error(f"[{self.name}] Step '{step.name}' failed: {e}")
                self._rollback()
                raise

            self.completed.append(step)
            self.state = step.reached

        self.state = WorkflowState.COMMITTED
        return self.state

    def _rollback(self) -> None:
        """Exécute les compensations des étapes terminées, en ordre inverse"""
        for step in reversed(self.completed):
            if step.compensation is None:
                continue
            try:
                step.compensation()
                logger.info(f"[{self.name}] Compensated step '{step.name}'")
            except Exception as e:
                logger.error(f"[{self.name}] Compensation of step '{step.name}' failed: {e}")
        self.completed = []
        self.state = WorkflowState.ROLLED_BACK
