"""
Predicados do código numérico.

Um predicado é qualquer callable ``bytes -> bool``. Os predicados são
injetados no RuleEvaluator, permitindo trocar a regra de domínio sem
modificar o avaliador ou o orquestrador.
"""
import logging
import re
from typing import Callable, Dict, Iterable, Optional

from object_validation.config.settings import AppConfig


logger = logging.getLogger(__name__)

NumericCodePredicate = Callable[[bytes], bool]


def _decode(content: bytes) -> str:
    return content.decode('utf-8', errors='replace')


class NumericCodeInRange:
    """
    Aceita o conteúdo se algum código casar com o padrão e estiver na faixa.

    Args:
        pattern: Expressão regular que localiza os códigos no texto
        minimum: Menor valor aceito (inclusivo)
        maximum: Maior valor aceito (inclusivo)
        allowed: Lista fechada de códigos aceitos (vazia = qualquer um na faixa)
    """

    def __init__(
        self,
        pattern: str = r'\b\d{4}\b',
        minimum: int = 1000,
        maximum: int = 9999,
        allowed: Optional[Iterable[str]] = None
    ):
        self.pattern = re.compile(pattern)
        self.minimum = minimum
        self.maximum = maximum
        self.allowed = frozenset(allowed or ())

    def __call__(self, content: bytes) -> bool:
        for match in self.pattern.finditer(_decode(content)):
            code = match.group(0)
            digits = re.sub(r'\D', '', code)
            if not digits:
                continue
            if not self.minimum <= int(digits) <= self.maximum:
                continue
            if self.allowed and code not in self.allowed:
                continue
            return True
        return False

    def __repr__(self) -> str:
        return (
            f"NumericCodeInRange(pattern={self.pattern.pattern!r}, "
            f"range=[{self.minimum}, {self.maximum}], allowed={sorted(self.allowed)})"
        )


class ProductIdCode:
    """
    Aceita o conteúdo se contiver um Prod ID: grupos numéricos separados por hífen.

    Ex.: ``1234-5678-9012-3456`` com groups=4.
    """

    def __init__(self, groups: int = 4):
        if groups < 1:
            raise ValueError("groups deve ser >= 1")
        self.groups = groups
        self.pattern = re.compile(
            r'(?<![\d-])' + r'-'.join([r'\d+'] * groups) + r'(?![\d-])'
        )

    def __call__(self, content: bytes) -> bool:
        return self.pattern.search(_decode(content)) is not None

    def __repr__(self) -> str:
        return f"ProductIdCode(groups={self.groups})"


# Registry de predicados disponíveis
_PREDICATE_BUILDERS: Dict[str, Callable[[AppConfig], NumericCodePredicate]] = {
    'range': lambda config: NumericCodeInRange(
        pattern=config.numeric_code_pattern,
        minimum=config.numeric_code_min,
        maximum=config.numeric_code_max,
        allowed=config.numeric_code_allowed,
    ),
    'product_id': lambda config: ProductIdCode(),
}


def register_predicate(name: str, builder: Callable[[AppConfig], NumericCodePredicate]):
    """
    Registra um novo construtor de predicado.

    Args:
        name: Nome usado em NUMERIC_CODE_PREDICATE
        builder: Função que recebe AppConfig e retorna o predicado
    """
    _PREDICATE_BUILDERS[name.lower()] = builder
    logger.info(f"Predicado '{name}' registrado")


def predicate_from_config(config: AppConfig) -> NumericCodePredicate:
    """
    Cria o predicado configurado em config.numeric_code_predicate.

    Raises:
        ValueError: Se o nome do predicado não estiver registrado
    """
    name = config.numeric_code_predicate.lower()
    if name not in _PREDICATE_BUILDERS:
        available = ', '.join(sorted(_PREDICATE_BUILDERS))
        raise ValueError(
            f"Predicado '{name}' não encontrado. Predicados disponíveis: {available}"
        )
    predicate = _PREDICATE_BUILDERS[name](config)
    logger.info(f"Predicado do código numérico: {predicate!r}")
    return predicate
