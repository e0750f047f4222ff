"""
Exceptions du domaine - Taxonomie des erreurs du service de comptes

Ces exceptions sont indépendantes de l'infrastructure (HTTP, base de données).
"""

from typing import Optional


class AccountServiceError(Exception):
    """Exception de base pour toutes les erreurs du service"""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AccountServiceError, ValueError):
    """Entrée manquante ou malformée, détectée avant toute écriture"""


class PersistenceError(AccountServiceError):
    """Échec d'une lecture ou d'une écriture dans le store"""


class PersistenceTimeoutError(PersistenceError):
    """Le store n'a pas répondu dans le délai imparti"""


class NotFoundError(PersistenceError):
    """Aucune ligne ne correspond à la recherche"""

    def __init__(self, entity: str, identifier: str):
        super().__init__(
            f"{entity} '{identifier}' not found",
            details={"entity": entity, "id": identifier}
        )


class AuthError(AccountServiceError):
    """Identifiants invalides"""


class AuthorizationError(AccountServiceError):
    """Identifiants valides mais accès refusé à l'organisation demandée"""


class WorkflowCancelledError(AccountServiceError):
    """Le workflow a été annulé avant l'étape suivante"""

    def __init__(self, workflow: str, step: str):
        super().__init__(
            f"Workflow '{workflow}' cancelled before step '{step}'",
            details={"workflow": workflow, "step": step}
        )
