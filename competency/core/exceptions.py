"""
Custom Exceptions - R&D Competency Platform
competency/core/exceptions.py

Custom exception classes for repository and evaluation workflow operations.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the store."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class EntityDeletedException(RepositoryException):
    """Entity has been soft-deleted."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} has been deleted")


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class EvaluationWorkflowException(Exception):
    """Base exception for evaluation status workflow violations."""

    pass


class InvalidStatusTransitionException(EvaluationWorkflowException):
    """Requested status change is not in the allowed-transition table."""

    def __init__(self, current_status: str, target_status: str):
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Cannot transition evaluation from '{current_status}' to '{target_status}'"
        )


class EvaluationLockedException(EvaluationWorkflowException):
    """Evaluation is approved and can no longer be edited."""

    def __init__(self, evaluation_id: str, status: str = "approved"):
        self.evaluation_id = evaluation_id
        self.status = status
        super().__init__(f"Evaluation {evaluation_id} is {status} and cannot be modified")
