"""
Core - Estrutura base do pipeline.

Contém os componentes agnósticos às regras de validação:
- Modelos de domínio (ObjectRef, ValidationVerdict, Tag, OutcomeMessage)
- Hierarquia de exceções
- ValidationPipelineOrchestrator: Orquestrador por invocação
"""

from object_validation.core.models import (
    InvalidReason,
    InvocationOutcome,
    ObjectRef,
    OutcomeMessage,
    Tag,
    TagState,
    ValidationVerdict,
)
from object_validation.core.exceptions import (
    ContentFetchError,
    DispatchFailed,
    EventDecodeError,
    InvalidTransition,
    ObjectAccessDenied,
    ObjectNotFound,
    ObjectValidationError,
    PipelineError,
    TagError,
    TagWriteFailed,
)

__all__ = [
    'InvalidReason',
    'InvocationOutcome',
    'ObjectRef',
    'OutcomeMessage',
    'Tag',
    'TagState',
    'ValidationVerdict',
    'ContentFetchError',
    'DispatchFailed',
    'EventDecodeError',
    'InvalidTransition',
    'ObjectAccessDenied',
    'ObjectNotFound',
    'ObjectValidationError',
    'PipelineError',
    'TagError',
    'TagWriteFailed',
]
