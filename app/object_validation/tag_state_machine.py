"""
Máquina de estados da tag de ciclo de vida dos objetos.

A tag no object store é estado compartilhado entre invocações; este módulo é
o único ponto que a altera. Transições permitidas:

    UNTAGGED   -> validating
    VALIDATING -> validating          (no-op: replay de invocação)
    VALIDATING -> valid | quarantine

Qualquer outra transição é InvalidTransition. O estado atual é relido do
object store imediatamente antes de cada gravação (escrita condicional), o
que rejeita a segunda tag terminal quando duas invocações correm sobre o
mesmo objeto. O S3 não oferece compare-and-set para tags, então ainda existe
uma janela entre a leitura e a gravação.
"""
import logging
from typing import Dict, Optional

from object_validation.core.exceptions import InvalidTransition
from object_validation.core.models import ObjectRef, Tag, TagState
from object_validation.handlers.s3_handler import S3ObjectHandler


logger = logging.getLogger(__name__)

DEFAULT_TAG_KEY = "validation-status"


class TagStateMachine:
    """
    Aplica a tag de ciclo de vida respeitando a ordem das transições.

    Tags não relacionadas já presentes no objeto são preservadas; apenas a
    chave de ciclo de vida é substituída.
    """

    def __init__(self, s3_handler: S3ObjectHandler, tag_key: str = DEFAULT_TAG_KEY):
        """
        Args:
            s3_handler: Handler usado para ler e gravar as tags
            tag_key: Chave da tag de ciclo de vida
        """
        self.s3_handler = s3_handler
        self.tag_key = tag_key

    def _state_of(self, ref: ObjectRef, tags: Dict[str, str]) -> TagState:
        value = tags.get(self.tag_key)
        if value is None:
            return TagState.UNTAGGED
        if value == Tag.VALIDATING.value:
            return TagState.VALIDATING
        if value in (Tag.VALID.value, Tag.QUARANTINE.value):
            return TagState.TERMINAL
        # Valor desconhecido: não é possível provar a origem, rejeitar
        raise InvalidTransition(ref, value, "<unknown>")

    def current_state(self, ref: ObjectRef) -> TagState:
        """
        Lê o estado atual do objeto.

        Raises:
            TagWriteFailed: Se as tags não puderem ser lidas
            InvalidTransition: Se a tag tiver um valor desconhecido
        """
        return self._state_of(ref, self.s3_handler.get_tags(ref))

    def current_tag(self, ref: ObjectRef) -> Optional[Tag]:
        """Valor atual da tag de ciclo de vida, ou None se ausente."""
        value = self.s3_handler.get_tags(ref).get(self.tag_key)
        return Tag(value) if value in {t.value for t in Tag} else None

    def apply_tag(self, ref: ObjectRef, tag: Tag) -> bool:
        """
        Aplica a tag ao objeto.

        Args:
            ref: Objeto alvo
            tag: Tag requisitada

        Returns:
            True se a tag foi gravada, False se foi um no-op idempotente
            (validating reaplicado a um objeto já em validating)

        Raises:
            InvalidTransition: Transição fora da ordem permitida
            TagWriteFailed: Falha de leitura ou gravação no object store
        """
        tags = self.s3_handler.get_tags(ref)
        state = self._state_of(ref, tags)

        if tag is Tag.VALIDATING:
            if state is TagState.VALIDATING:
                logger.warning(
                    f"{ref} já está em '{Tag.VALIDATING.value}'. "
                    "Replay de invocação, gravação ignorada."
                )
                return False
            if state is not TagState.UNTAGGED:
                raise InvalidTransition(ref, tags.get(self.tag_key), tag)
        elif state is not TagState.VALIDATING:
            raise InvalidTransition(ref, tags.get(self.tag_key) or state, tag)

        new_tags = dict(tags)
        new_tags[self.tag_key] = tag.value
        self.s3_handler.put_tags(ref, new_tags)
        logger.info(f"{ref}: tag '{self.tag_key}' {state.value} -> {tag.value}")
        return True
