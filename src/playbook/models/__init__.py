"""Data models for playbook documents.

This package defines:
- The parsed document tree (Document, Argument, Step)
- The closed vocabularies for step fields (Autonomy, ErrorPolicy,
  EscalationTrigger, Condition, Model)

Example:
    >>> from playbook.models import Autonomy, Step
    >>> Step(id="plan", command="/speckit.plan", autonomy=Autonomy.AUTO.value)
"""

from .document import Argument, Document, Step
from .vocab import (
    FIELD_VOCABULARIES,
    LIST_FIELDS,
    Autonomy,
    Condition,
    ErrorPolicy,
    EscalationTrigger,
    Model,
    allowed,
    values,
)

__all__ = [
    "FIELD_VOCABULARIES",
    "LIST_FIELDS",
    "Argument",
    "Autonomy",
    "Condition",
    "Document",
    "ErrorPolicy",
    "EscalationTrigger",
    "Model",
    "Step",
    "allowed",
    "values",
]
