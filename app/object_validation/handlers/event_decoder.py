"""
Decodificação de notificações "object created" do S3 em ObjectRef.
"""
import logging
from typing import Any, Dict, List
from urllib.parse import unquote_plus

from object_validation.core.exceptions import EventDecodeError
from object_validation.core.models import ObjectRef


logger = logging.getLogger(__name__)


def _decode_record(record: Dict[str, Any]) -> ObjectRef:
    s3 = record.get('s3') or {}
    bucket = (s3.get('bucket') or {}).get('name')
    obj = s3.get('object') or {}
    raw_key = obj.get('key')

    if not bucket:
        raise EventDecodeError("Missing bucket name")
    if raw_key is None:
        raise EventDecodeError("Missing object key")

    # O S3 codifica a chave na notificação (espaços viram '+')
    return ObjectRef(
        bucket=bucket,
        key=unquote_plus(raw_key),
        size=int(obj.get('size') or 0),
        content_type=obj.get('contentType'),
        version_id=obj.get('versionId'),
        sequencer=obj.get('sequencer'),
    )


def decode_s3_event(event: Dict[str, Any]) -> List[ObjectRef]:
    """
    Converte um evento de notificação do S3 em uma lista de ObjectRef.

    Registros que não são ObjectCreated são ignorados com aviso.

    Args:
        event: Payload recebido pela função Lambda

    Returns:
        Lista (possivelmente vazia) de objetos a validar

    Raises:
        EventDecodeError: Se o payload não tiver 'Records' ou um registro estiver incompleto
    """
    if not isinstance(event, dict) or 'Records' not in event:
        raise EventDecodeError("No records found in event")

    refs = []
    for i, record in enumerate(event['Records'] or []):
        event_name = record.get('eventName', '')
        if event_name and not event_name.startswith('ObjectCreated'):
            logger.warning(f"Registro {i} ignorado: evento '{event_name}' não é ObjectCreated")
            continue
        refs.append(_decode_record(record))

    logger.info(f"{len(refs)} objeto(s) decodificado(s) do evento")
    return refs
