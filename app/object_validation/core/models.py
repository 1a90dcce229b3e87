"""
Modelos de domínio do pipeline de validação de objetos.

Todos os modelos são imutáveis: um ObjectRef é criado pelo decoder do evento
e nunca é alterado durante a invocação.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class InvalidReason(Enum):
    """Motivos possíveis para um veredito inválido (conjunto fechado)."""
    EMPTY_CONTENT = "EmptyContent"
    WRONG_EXTENSION = "WrongExtension"
    FAILED_NUMERIC_CODE = "FailedNumericCode"


class Tag(Enum):
    """Valores da tag de ciclo de vida aplicada ao objeto."""
    VALIDATING = "validating"
    VALID = "valid"
    QUARANTINE = "quarantine"

    @property
    def is_terminal(self) -> bool:
        return self in (Tag.VALID, Tag.QUARANTINE)


class TagState(Enum):
    """Estados da máquina de tags, derivados do valor atual da tag."""
    UNTAGGED = "UNTAGGED"
    VALIDATING = "VALIDATING"
    TERMINAL = "TERMINAL"


@dataclass(frozen=True)
class ObjectRef:
    """
    Identifica um objeto armazenado no bucket.

    version_id é opcional, mas quando presente é repassado a todas as
    chamadas S3 para operar sobre a versão correta do objeto.
    sequencer vem da notificação e distingue uploads sucessivos da mesma chave
    em buckets sem versionamento.
    """

    bucket: str
    key: str
    size: int = 0
    content_type: Optional[str] = None
    version_id: Optional[str] = None
    sequencer: Optional[str] = None

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'bucket': self.bucket,
            'key': self.key,
            'version_id': self.version_id,
            'size': self.size,
            'content_type': self.content_type,
            'sequencer': self.sequencer,
        }

    def __str__(self) -> str:
        if self.version_id:
            return f"{self.uri} (versionId: {self.version_id})"
        return self.uri


@dataclass(frozen=True)
class ValidationVerdict:
    """
    Resultado da validação: válido, ou inválido com um motivo.

    Use os construtores valid() e invalid() em vez de instanciar diretamente.
    """

    reason: Optional[InvalidReason] = None
    message: str = "File is valid"

    @classmethod
    def valid(cls) -> "ValidationVerdict":
        return cls(reason=None, message="File is valid")

    @classmethod
    def invalid(cls, reason: InvalidReason, message: str) -> "ValidationVerdict":
        return cls(reason=reason, message=message)

    @property
    def is_valid(self) -> bool:
        return self.reason is None

    @property
    def terminal_tag(self) -> Tag:
        """Tag terminal correspondente ao veredito."""
        return Tag.VALID if self.is_valid else Tag.QUARANTINE

    def __str__(self) -> str:
        if self.is_valid:
            return "Valid"
        return f"Invalid({self.reason.value})"


@dataclass(frozen=True)
class OutcomeMessage:
    """Mensagem de resultado enviada a exatamente um canal por invocação."""

    object_ref: ObjectRef
    verdict: ValidationVerdict
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: Optional[str] = None


@dataclass(frozen=True)
class InvocationOutcome:
    """Resultado de uma invocação bem-sucedida para um objeto."""

    object_ref: ObjectRef
    verdict: ValidationVerdict
    dispatched: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'object': self.object_ref.to_dict(),
            'verdict': 'valid' if self.verdict.is_valid else 'invalid',
            'reason': self.verdict.reason.value if self.verdict.reason else None,
            'message': self.verdict.message,
            'dispatched': self.dispatched,
        }
