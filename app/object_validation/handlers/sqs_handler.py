"""
Handler para envio de mensagens a uma fila SQS FIFO.
"""
import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from object_validation.core.exceptions import DispatchFailed


logger = logging.getLogger(__name__)


class SQSChannel:
    """
    Canal de saída ligado a uma única fila SQS.

    A fila é FIFO com deduplicação: ordenação e deduplicação são garantias
    da própria fila, este handler apenas envia.
    """

    def __init__(
        self,
        queue_url: str,
        name: str,
        message_group_id: str = "ValidationGroup",
        sqs_client=None,
        region_name: Optional[str] = None
    ):
        """
        Args:
            queue_url: URL da fila
            name: Nome lógico do canal (ex: success, failure), usado nos logs
            message_group_id: MessageGroupId da fila FIFO
            sqs_client: Cliente SQS opcional (útil para testes)
            region_name: Região AWS usada quando o cliente é criado aqui
        """
        if not queue_url:
            raise ValueError(f"queue_url obrigatório para o canal '{name}'")
        self.queue_url = queue_url
        self.name = name
        self.message_group_id = message_group_id
        if sqs_client is not None:
            self.client = sqs_client
        elif region_name:
            self.client = boto3.client("sqs", region_name=region_name)
        else:
            self.client = boto3.client("sqs")

    def send(self, body: str, deduplication_id: Optional[str] = None) -> Optional[str]:
        """
        Enfileira uma mensagem.

        Args:
            body: Corpo da mensagem (JSON)
            deduplication_id: MessageDeduplicationId (opcional)

        Returns:
            MessageId retornado pela fila

        Raises:
            DispatchFailed: Se o envio falhar
        """
        params = {
            'QueueUrl': self.queue_url,
            'MessageBody': body,
            'MessageGroupId': self.message_group_id,
        }
        if deduplication_id:
            params['MessageDeduplicationId'] = deduplication_id

        try:
            response = self.client.send_message(**params)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', '')
            raise DispatchFailed(
                f"Falha ao enviar mensagem ao canal '{self.name}' ({code}): {e}"
            ) from e
        except BotoCoreError as e:
            raise DispatchFailed(
                f"Fila do canal '{self.name}' indisponível: {e}"
            ) from e

        message_id = response.get('MessageId')
        logger.info(f"Mensagem {message_id} enviada ao canal '{self.name}'")
        return message_id

    def __repr__(self) -> str:
        return f"SQSChannel(name={self.name}, queue_url={self.queue_url})"
