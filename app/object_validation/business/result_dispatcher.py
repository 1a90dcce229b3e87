"""
Result Dispatcher - envia a mensagem de resultado ao canal correto.

Valid -> canal de sucesso; Invalid(*) -> canal de falha. Cada chamada de
dispatch() envia exatamente uma mensagem a exatamente um canal.
"""
import hashlib
import json
import logging
from typing import Any, Dict, List, Optional

from object_validation.core.models import OutcomeMessage
from object_validation.handlers.sqs_handler import SQSChannel


logger = logging.getLogger(__name__)


class ResultDispatcher:
    """
    Roteia OutcomeMessage para o canal de sucesso ou de falha.

    Args:
        success_channel: Canal para vereditos válidos
        failure_channel: Canal para vereditos inválidos
        workflow_name: Nome do workflow no corpo da mensagem
        categories: Categorias no corpo da mensagem
        continue_url: URL de continuação (apenas mensagens de falha)
        abort_url: URL de aborto (apenas mensagens de falha)
    """

    def __init__(
        self,
        success_channel: SQSChannel,
        failure_channel: SQSChannel,
        workflow_name: str = "Validation_Workflow",
        categories: Optional[List[str]] = None,
        continue_url: Optional[str] = None,
        abort_url: Optional[str] = None
    ):
        self.success_channel = success_channel
        self.failure_channel = failure_channel
        self.workflow_name = workflow_name
        self.categories = list(categories or [])
        self.continue_url = continue_url
        self.abort_url = abort_url

    def select_channel(self, message: OutcomeMessage) -> SQSChannel:
        return self.success_channel if message.verdict.is_valid else self.failure_channel

    def build_body(self, message: OutcomeMessage) -> Dict[str, Any]:
        """Monta o corpo JSON da mensagem."""
        verdict = message.verdict
        is_failure = not verdict.is_valid
        return {
            'workflow': self.workflow_name,
            'exc_id': message.request_id,
            'categories': self.categories,
            'object': message.object_ref.to_dict(),
            'verdict': 'valid' if verdict.is_valid else 'invalid',
            'reason': verdict.reason.value if verdict.reason else None,
            'message': verdict.message,
            'timestamp': message.timestamp.isoformat(),
            'continue_url': self.continue_url if is_failure else None,
            'abort_url': self.abort_url if is_failure else None,
        }

    @staticmethod
    def deduplication_id(message: OutcomeMessage) -> str:
        """
        Id de deduplicação estável por upload do objeto.

        Um replay do dispatch para o mesmo upload gera o mesmo id, e a fila
        FIFO descarta a cópia dentro da janela de deduplicação. Sem versionId
        o upload é identificado pelo sequencer da notificação e, na falta
        dele, pelo timestamp da mensagem.
        """
        ref = message.object_ref
        upload = ref.version_id or ref.sequencer or message.timestamp.isoformat()
        raw = f"{ref.bucket}|{ref.key}|{upload}"
        return hashlib.sha256(raw.encode()).hexdigest()

    def dispatch(self, message: OutcomeMessage) -> Optional[str]:
        """
        Envia a mensagem ao canal correspondente ao veredito.

        Returns:
            MessageId retornado pelo canal

        Raises:
            DispatchFailed: Se o envio falhar (sem retry interno)
        """
        channel = self.select_channel(message)
        body = json.dumps(self.build_body(message))
        logger.info(
            f"Enviando resultado {message.verdict} de {message.object_ref} "
            f"ao canal '{channel.name}'"
        )
        return channel.send(body, deduplication_id=self.deduplication_id(message))
