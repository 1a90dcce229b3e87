"""
Entry Point da função AWS Lambda - Validação de objetos no S3.

Acionada por notificações s3:ObjectCreated:* de um bucket versionado:
- Marca o objeto como 'validating'
- Valida o objeto contra as regras configuradas
- Marca o objeto como 'valid' ou 'quarantine'
- Envia o resultado para a fila de sucesso ou de falha

Design Patterns aplicados:
- Orchestrator: ValidationPipelineOrchestrator coordena as etapas
- Strategy: O predicado do código numérico é injetado no RuleEvaluator
- Dependency Injection: Todas as dependências são injetadas
"""
import logging
from typing import Optional

import boto3

from object_validation.business.predicates import predicate_from_config
from object_validation.business.result_dispatcher import ResultDispatcher
from object_validation.business.rule_evaluator import RuleEvaluator
from object_validation.config.settings import AppConfig
from object_validation.core.orchestrator import ValidationPipelineOrchestrator
from object_validation.handlers.s3_handler import S3ObjectHandler
from object_validation.handlers.sqs_handler import SQSChannel
from object_validation.tag_state_machine import TagStateMachine

# Configurar logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Orquestrador reutilizado enquanto o ambiente de execução estiver ativo
_orchestrator: Optional[ValidationPipelineOrchestrator] = None


def build_orchestrator(config: AppConfig, s3_client=None, sqs_client=None) -> ValidationPipelineOrchestrator:
    """
    Cria o orquestrador e todas as suas dependências.

    Args:
        config: Configurações da aplicação
        s3_client: Cliente S3 opcional (útil para testes)
        sqs_client: Cliente SQS opcional (útil para testes)

    Returns:
        Orquestrador pronto para uso
    """
    config.validate()

    s3_client = s3_client or boto3.client('s3', region_name=config.aws_region)
    sqs_client = sqs_client or boto3.client('sqs', region_name=config.aws_region)

    s3_handler = S3ObjectHandler(s3_client=s3_client)
    tag_state_machine = TagStateMachine(s3_handler, tag_key=config.tag_key)
    rule_evaluator = RuleEvaluator(
        numeric_code_predicate=predicate_from_config(config),
        expected_extension=config.expected_extension
    )
    dispatcher = ResultDispatcher(
        success_channel=SQSChannel(
            config.success_queue_url, 'success',
            message_group_id=config.message_group_id, sqs_client=sqs_client
        ),
        failure_channel=SQSChannel(
            config.failure_queue_url, 'failure',
            message_group_id=config.message_group_id, sqs_client=sqs_client
        ),
        workflow_name=config.workflow_name,
        categories=config.message_categories,
        continue_url=config.continue_url,
        abort_url=config.abort_url
    )

    logger.info(f"Configurações carregadas: {config}")
    return ValidationPipelineOrchestrator(
        s3_handler=s3_handler,
        tag_state_machine=tag_state_machine,
        rule_evaluator=rule_evaluator,
        dispatcher=dispatcher
    )


def get_orchestrator() -> ValidationPipelineOrchestrator:
    """Retorna o orquestrador em cache, criando-o na primeira chamada."""
    global _orchestrator

    if _orchestrator is None:
        config = AppConfig()
        logging.getLogger().setLevel(config.log_level)
        _orchestrator = build_orchestrator(config)
    return _orchestrator


def lambda_handler(event, context):
    """
    Handler da função Lambda.

    Returns:
        Dicionário com req_id, status e o resultado de cada objeto

    Raises:
        PipelineError: Invocação abortada; o host re-invoca a função
    """
    req_id = getattr(context, 'aws_request_id', None)
    logger.info(f"Invocação {req_id} iniciada")

    try:
        outcomes = get_orchestrator().handle(event, request_id=req_id)
    except Exception as e:
        logger.error(f"Erro na invocação {req_id}: {e}", exc_info=True)
        raise

    return {
        'req_id': req_id,
        'status': 'success',
        'results': [outcome.to_dict() for outcome in outcomes],
    }
