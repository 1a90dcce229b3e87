"""
Exceções do pipeline de validação.

Erros de chamadas externas (S3, SQS) são traduzidos para estas exceções nos
handlers; o orquestrador as envolve em PipelineError indicando a etapa abortada.
Nenhuma delas é tratada com retry interno: a recuperação depende da
re-invocação do host (at-least-once).
"""
from typing import Optional


class ObjectValidationError(Exception):
    """Classe base para todos os erros do pipeline."""


class EventDecodeError(ObjectValidationError):
    """Payload de notificação malformado."""


class ContentFetchError(ObjectValidationError):
    """Falha ao obter o conteúdo do objeto."""


class ObjectNotFound(ContentFetchError):
    """Objeto (ou versão) não encontrado no bucket."""


class ObjectAccessDenied(ContentFetchError):
    """Sem permissão para ler o objeto."""


class TagError(ObjectValidationError):
    """Classe base para erros da máquina de estados de tags."""


class InvalidTransition(TagError):
    """
    Transição de tag não permitida.

    Indica invocação duplicada sobre um objeto já finalizado ou um erro de
    ordenação no chamador. É fatal para a invocação.
    """

    def __init__(self, object_ref, current, requested):
        self.object_ref = object_ref
        self.current = current
        self.requested = requested
        super().__init__(
            f"Transição inválida para {object_ref}: "
            f"{getattr(current, 'value', current)} -> {getattr(requested, 'value', requested)}"
        )


class TagWriteFailed(TagError):
    """Falha ao ler ou gravar o conjunto de tags no object store."""


class DispatchFailed(ObjectValidationError):
    """Falha ao enfileirar a mensagem de resultado no canal."""


class PipelineError(ObjectValidationError):
    """
    Invocação abortada.

    Args:
        object_ref: Objeto em processamento (None se a falha ocorreu antes do decode)
        stage: Etapa abortada (tag_validating, tag_terminal, dispatch)
        cause: Exceção original
    """

    STAGE_TAG_VALIDATING = "tag_validating"
    STAGE_TAG_TERMINAL = "tag_terminal"
    STAGE_DISPATCH = "dispatch"

    def __init__(self, object_ref, stage: str, cause: Optional[Exception] = None):
        self.object_ref = object_ref
        self.stage = stage
        self.cause = cause
        super().__init__(f"Pipeline abortado na etapa '{stage}' para {object_ref}: {cause}")
