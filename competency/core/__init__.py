"""
Core Package - R&D Competency Platform
competency/core/__init__.py

Core infrastructure: dependencies, exceptions, logging.
Dependency getters are imported from competency.core.dependencies.
"""

from competency.core.exceptions import (
    DuplicateEntityException,
    EntityDeletedException,
    EntityNotFoundException,
    EvaluationLockedException,
    EvaluationWorkflowException,
    InvalidStatusTransitionException,
    RepositoryException,
)

__all__ = [
    "DuplicateEntityException",
    "EntityDeletedException",
    "EntityNotFoundException",
    "EvaluationLockedException",
    "EvaluationWorkflowException",
    "InvalidStatusTransitionException",
    "RepositoryException",
]
