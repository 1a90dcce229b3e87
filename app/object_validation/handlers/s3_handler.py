"""
Handler para leitura de conteúdo e tags de objetos no S3.

Mantido em handlers/ para separação de responsabilidades: nenhum outro
módulo chama o cliente S3 diretamente.
"""
import logging
from typing import Dict

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from object_validation.core.exceptions import (
    ObjectAccessDenied,
    ObjectNotFound,
    ContentFetchError,
    TagWriteFailed,
)
from object_validation.core.models import ObjectRef


logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {'NoSuchKey', 'NoSuchVersion', 'NoSuchBucket', '404', 'NotFound'}
_ACCESS_DENIED_CODES = {'AccessDenied', '403', 'Forbidden'}


def _get_s3_client(region_name: str = None):
    """
    Obtém cliente S3 com região especificada.

    Args:
        region_name: Nome da região AWS (opcional)

    Returns:
        Cliente boto3 S3
    """
    if region_name:
        return boto3.client("s3", region_name=region_name)
    return boto3.client("s3")


def _error_code(error: ClientError) -> str:
    return str(error.response.get('Error', {}).get('Code', ''))


class S3ObjectHandler:
    """
    Classe especialista para operações sobre um objeto S3.

    Todas as chamadas incluem VersionId quando o ObjectRef o possui.
    Nenhuma chamada é repetida internamente.
    """

    def __init__(self, s3_client=None, region_name: str = None):
        """
        Args:
            s3_client: Cliente S3 opcional (útil para testes)
            region_name: Região AWS usada quando o cliente é criado aqui
        """
        self.client = s3_client or _get_s3_client(region_name)

    @staticmethod
    def _object_params(ref: ObjectRef) -> Dict[str, str]:
        params = {'Bucket': ref.bucket, 'Key': ref.key}
        if ref.version_id:
            params['VersionId'] = ref.version_id
        return params

    def fetch(self, ref: ObjectRef) -> bytes:
        """
        Lê o conteúdo completo do objeto.

        Raises:
            ObjectNotFound: Objeto ou versão inexistente
            ObjectAccessDenied: Sem permissão de leitura
            ContentFetchError: Qualquer outra falha do S3, inclusive de transporte
        """
        try:
            response = self.client.get_object(**self._object_params(ref))
            body = response['Body']
            try:
                return body.read()
            finally:
                body.close()
        except ClientError as e:
            code = _error_code(e)
            if code in _NOT_FOUND_CODES:
                raise ObjectNotFound(f"Objeto não encontrado: {ref}") from e
            if code in _ACCESS_DENIED_CODES:
                raise ObjectAccessDenied(f"Acesso negado ao objeto: {ref}") from e
            raise ContentFetchError(f"Erro ao ler {ref} ({code}): {e}") from e
        except BotoCoreError as e:
            # Timeout, conexão recusada ou leitura incompleta do corpo
            raise ContentFetchError(f"Erro de transporte ao ler {ref}: {e}") from e

    def get_tags(self, ref: ObjectRef) -> Dict[str, str]:
        """
        Retorna o conjunto de tags atual do objeto como dicionário.

        Raises:
            TagWriteFailed: Se a leitura das tags falhar
        """
        try:
            response = self.client.get_object_tagging(**self._object_params(ref))
        except ClientError as e:
            raise TagWriteFailed(
                f"Não foi possível ler as tags de {ref}: {_error_code(e)} {e}"
            ) from e
        except BotoCoreError as e:
            raise TagWriteFailed(f"Object store indisponível ao ler as tags de {ref}: {e}") from e
        return {tag['Key']: tag['Value'] for tag in response.get('TagSet', [])}

    def put_tags(self, ref: ObjectRef, tags: Dict[str, str]):
        """
        Substitui o conjunto de tags do objeto.

        Raises:
            TagWriteFailed: Se a gravação falhar (store indisponível, permissão negada)
        """
        tag_set = [{'Key': key, 'Value': value} for key, value in tags.items()]
        try:
            self.client.put_object_tagging(
                Tagging={'TagSet': tag_set},
                **self._object_params(ref)
            )
        except ClientError as e:
            raise TagWriteFailed(
                f"Original Error: {_error_code(e)} {e} "
                f"Caused: Could not write tags {tags} to Object {ref}"
            ) from e
        except BotoCoreError as e:
            raise TagWriteFailed(
                f"Original Error: {e} Caused: Could not write tags {tags} to Object {ref}"
            ) from e
