"""
Orchestrator - Orquestra a validação de um objeto recém-criado.

Sequência por objeto (a ordem faz parte do contrato, pois a tag
'validating' precisa estar visível antes da verificação):

    1. tag validating
    2. leitura do conteúdo + avaliação das regras
    3. tag terminal (valid | quarantine)
    4. dispatch da mensagem de resultado

Sem retry e sem rollback: uma falha aborta as etapas restantes do objeto e
a invocação é reportada como falha ao host, que re-invoca (at-least-once).
"""
import logging
from typing import Any, Dict, List, Optional

from object_validation.business.result_dispatcher import ResultDispatcher
from object_validation.business.rule_evaluator import RuleEvaluator
from object_validation.core.exceptions import (
    ContentFetchError,
    DispatchFailed,
    InvalidTransition,
    PipelineError,
    TagError,
)
from object_validation.core.models import InvocationOutcome, ObjectRef, OutcomeMessage, Tag
from object_validation.handlers.event_decoder import decode_s3_event
from object_validation.handlers.s3_handler import S3ObjectHandler
from object_validation.tag_state_machine import TagStateMachine


logger = logging.getLogger(__name__)


class ValidationPipelineOrchestrator:
    """
    Orquestrador do pipeline validação -> tag -> dispatch.

    Design Patterns aplicados:
    - Orchestrator: Coordena as etapas na ordem fixa
    - Fail-Safe: Em lotes, a falha de um objeto não impede os demais
    - Dependency Injection: Todas as dependências são injetadas
    """

    def __init__(
        self,
        s3_handler: S3ObjectHandler,
        tag_state_machine: TagStateMachine,
        rule_evaluator: RuleEvaluator,
        dispatcher: ResultDispatcher,
        continue_on_error: bool = True
    ):
        """
        Inicializa o orquestrador.

        Args:
            s3_handler: Handler de leitura de conteúdo
            tag_state_machine: Único ponto de escrita da tag de ciclo de vida
            rule_evaluator: Avaliador de regras
            dispatcher: Dispatcher de resultados
            continue_on_error: Se True, processa os demais objetos do lote após uma falha
        """
        self.s3_handler = s3_handler
        self.tag_state_machine = tag_state_machine
        self.rule_evaluator = rule_evaluator
        self.dispatcher = dispatcher
        self.continue_on_error = continue_on_error
        logger.info("ValidationPipelineOrchestrator inicializado")

    def _fetch_content(self, ref: ObjectRef) -> Optional[bytes]:
        try:
            return self.s3_handler.fetch(ref)
        except ContentFetchError as e:
            # Falha fechada: o objeto não pode ficar sem tag terminal
            logger.warning(f"Não foi possível ler {ref}: {e}")
            return None

    def handle_object(self, ref: ObjectRef, request_id: Optional[str] = None) -> InvocationOutcome:
        """
        Executa o pipeline completo para um objeto.

        Args:
            ref: Objeto a validar
            request_id: Id da requisição do host, incluído na mensagem

        Returns:
            InvocationOutcome com o veredito

        Raises:
            PipelineError: Se uma escrita de tag ou o dispatch falhar

        Falha no dispatch após a tag terminal deixa o objeto terminal sem
        mensagem; o replay não recupera esse caso e exige re-drive manual.
        """
        logger.info(f"Validando {ref}")

        try:
            self.tag_state_machine.apply_tag(ref, Tag.VALIDATING)
        except TagError as e:
            if isinstance(e, InvalidTransition):
                logger.critical(f"Violação de contrato ao marcar {ref} como validating: {e}")
            else:
                logger.error(f"Falha ao marcar {ref} como validating: {e}")
            raise PipelineError(ref, PipelineError.STAGE_TAG_VALIDATING, e) from e

        content = self._fetch_content(ref)
        verdict = self.rule_evaluator.evaluate(ref, content)
        if verdict.is_valid:
            logger.info(f"{ref}: {verdict.message}")
        else:
            logger.info(f"File is invalid: {ref}: {verdict} {verdict.message}")

        try:
            self.tag_state_machine.apply_tag(ref, verdict.terminal_tag)
        except TagError as e:
            logger.error(
                f"Falha ao aplicar tag terminal '{verdict.terminal_tag.value}' em {ref}. "
                f"Objeto permanece em '{Tag.VALIDATING.value}': {e}"
            )
            raise PipelineError(ref, PipelineError.STAGE_TAG_TERMINAL, e) from e

        message = OutcomeMessage(object_ref=ref, verdict=verdict, request_id=request_id)
        try:
            self.dispatcher.dispatch(message)
        except DispatchFailed as e:
            logger.error(f"Falha ao enviar resultado de {ref}: {e}")
            raise PipelineError(ref, PipelineError.STAGE_DISPATCH, e) from e

        return InvocationOutcome(object_ref=ref, verdict=verdict, dispatched=True)

    def handle(self, raw_event: Dict[str, Any], request_id: Optional[str] = None) -> List[InvocationOutcome]:
        """
        Decodifica o evento e processa cada objeto de forma independente.

        Args:
            raw_event: Payload de notificação do S3
            request_id: Id da requisição do host

        Returns:
            Lista de InvocationOutcome, um por objeto processado

        Raises:
            EventDecodeError: Se o evento for malformado
            PipelineError: A primeira falha do lote, depois de processar os
                demais objetos (ou imediatamente, se continue_on_error=False)
        """
        refs = decode_s3_event(raw_event)
        outcomes = []
        failures = []

        for i, ref in enumerate(refs, 1):
            logger.info(f"Processando objeto {i}/{len(refs)}: {ref}")
            try:
                outcomes.append(self.handle_object(ref, request_id=request_id))
            except PipelineError as e:
                failures.append(e)
                if not self.continue_on_error:
                    raise

        logger.info(
            f"Execução concluída: total={len(refs)}, "
            f"sucessos={len(outcomes)}, falhas={len(failures)}"
        )

        if failures:
            raise failures[0]
        return outcomes
