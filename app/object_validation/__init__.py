"""
Módulo object_validation contendo o pipeline de validação, tag e dispatch
de objetos recém-criados no S3.

A tag de ciclo de vida é alterada APENAS via TagStateMachine.
"""

from .tag_state_machine import TagStateMachine
from .config.settings import AppConfig
from .core.orchestrator import ValidationPipelineOrchestrator

__all__ = [
    'TagStateMachine',
    'AppConfig',
    'ValidationPipelineOrchestrator',
]
