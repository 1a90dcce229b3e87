"""
Configurações da aplicação.

Centraliza todas as configurações do pipeline de validação, lidas de
variáveis de ambiente da função Lambda com valores padrão.
"""
import os
from typing import List, Optional


def _env_list(name: str, default: str = "") -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(',') if item.strip()]


class AppConfig:
    """
    Classe de configuração da aplicação.

    Carrega configurações de variáveis de ambiente ou usa valores padrão.
    As URLs das filas de sucesso/falha não têm padrão e são verificadas
    por validate().
    """

    def __init__(self):
        """
        Inicializa configurações a partir das variáveis de ambiente.
        """
        # AWS Configuration
        self.aws_region: str = os.getenv('AWS_REGION', 'us-east-1')

        # Canais de saída (filas SQS FIFO)
        self.success_queue_url: Optional[str] = os.getenv('SUCCESS_QUEUE_URL')
        self.failure_queue_url: Optional[str] = os.getenv('FAILURE_QUEUE_URL')
        self.message_group_id: str = os.getenv('MESSAGE_GROUP_ID', 'ValidationGroup')

        # Regras de validação
        self.expected_extension: str = os.getenv('EXPECTED_EXTENSION', 'txt').lstrip('.').lower()
        self.numeric_code_pattern: str = os.getenv('NUMERIC_CODE_PATTERN', r'\b\d{4}\b')
        self.numeric_code_min: int = int(os.getenv('NUMERIC_CODE_MIN', '1000'))
        self.numeric_code_max: int = int(os.getenv('NUMERIC_CODE_MAX', '9999'))
        self.numeric_code_allowed: List[str] = _env_list('NUMERIC_CODE_ALLOWED')
        self.numeric_code_predicate: str = os.getenv('NUMERIC_CODE_PREDICATE', 'range').lower()

        # Tag de ciclo de vida
        self.tag_key: str = os.getenv('VALIDATION_TAG_KEY', 'validation-status')

        # Corpo da mensagem
        self.workflow_name: str = os.getenv('WORKFLOW_NAME', 'Validation_Workflow')
        self.message_categories: List[str] = _env_list('MESSAGE_CATEGORIES', 'CD-TECH,AM-DEVS')
        self.continue_url: Optional[str] = os.getenv('CONTINUE_URL')
        self.abort_url: Optional[str] = os.getenv('ABORT_URL')

        # Logging Configuration
        self.log_level: str = os.getenv('LOG_LEVEL', 'INFO').upper()

    def validate(self):
        """
        Verifica se as configurações obrigatórias estão presentes.

        Raises:
            ValueError: Se alguma URL de fila estiver ausente ou a faixa do código for inválida
        """
        if not self.success_queue_url:
            raise ValueError("Missing SUCCESS_QUEUE_URL environment variable")
        if not self.failure_queue_url:
            raise ValueError("Missing FAILURE_QUEUE_URL environment variable")
        if self.numeric_code_min > self.numeric_code_max:
            raise ValueError(
                f"NUMERIC_CODE_MIN ({self.numeric_code_min}) maior que "
                f"NUMERIC_CODE_MAX ({self.numeric_code_max})"
            )

    def __repr__(self) -> str:
        """Representação string da configuração."""
        return (
            f"AppConfig("
            f"region={self.aws_region}, "
            f"success_queue={self.success_queue_url}, "
            f"failure_queue={self.failure_queue_url}, "
            f"extension={self.expected_extension}, "
            f"tag_key={self.tag_key}"
            f")"
        )
