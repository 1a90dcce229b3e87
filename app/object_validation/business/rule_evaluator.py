"""
Rule Evaluator - avalia o conteúdo e os metadados de um objeto.

Cada regra é uma estratégia independente; o avaliador executa as regras em
ordem fixa e para na primeira falha. A avaliação é pura: não faz I/O e não
altera seus argumentos.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import List, Optional, Sequence

from object_validation.business.predicates import NumericCodePredicate
from object_validation.core.models import InvalidReason, ObjectRef, ValidationVerdict


logger = logging.getLogger(__name__)


class ValidationRule(ABC):
    """
    Classe base para regras de validação.

    Subclasses definem o motivo (reason) e implementam check(), que retorna
    None quando a regra passa ou a mensagem descrevendo a falha.
    """

    reason: InvalidReason

    @abstractmethod
    def check(self, ref: ObjectRef, content: bytes) -> Optional[str]:
        pass

    def get_rule_name(self) -> str:
        return self.__class__.__name__


class ContentLengthRule(ValidationRule):
    """O conteúdo deve ter pelo menos 1 byte."""

    reason = InvalidReason.EMPTY_CONTENT

    def check(self, ref: ObjectRef, content: bytes) -> Optional[str]:
        if len(content) == 0:
            return "Invalid size, it should be greater than 0"
        return None


class ExtensionRule(ValidationRule):
    """A extensão derivada da chave deve ser igual à extensão esperada."""

    reason = InvalidReason.WRONG_EXTENSION

    def __init__(self, expected_extension: str = "txt"):
        self.expected_extension = expected_extension.lstrip('.').lower()

    def check(self, ref: ObjectRef, content: bytes) -> Optional[str]:
        suffix = PurePosixPath(ref.key).suffix
        if not suffix:
            return "Missing file extension"
        if suffix[1:].lower() != self.expected_extension:
            return f"Invalid file extension, should be .{self.expected_extension}"
        return None


class NumericCodeRule(ValidationRule):
    """O conteúdo deve conter um código numérico aceito pelo predicado."""

    reason = InvalidReason.FAILED_NUMERIC_CODE

    def __init__(self, predicate: NumericCodePredicate):
        self.predicate = predicate

    def check(self, ref: ObjectRef, content: bytes) -> Optional[str]:
        if not self.predicate(content):
            return "Invalid content, it should contain a conformant numeric code"
        return None


class RuleEvaluator:
    """
    Avalia um objeto contra uma sequência ordenada de regras.

    Ordem padrão: tamanho -> extensão -> código numérico.
    """

    def __init__(
        self,
        numeric_code_predicate: NumericCodePredicate,
        expected_extension: str = "txt",
        extra_rules: Optional[Sequence[ValidationRule]] = None
    ):
        """
        Args:
            numeric_code_predicate: Predicado ``bytes -> bool`` do código numérico
            expected_extension: Extensão esperada (sem ponto)
            extra_rules: Regras adicionais, avaliadas depois das padrão
        """
        self.rules: List[ValidationRule] = [
            ContentLengthRule(),
            ExtensionRule(expected_extension),
            NumericCodeRule(numeric_code_predicate),
        ]
        self.rules.extend(extra_rules or [])

    def evaluate(self, ref: ObjectRef, content: Optional[bytes]) -> ValidationVerdict:
        """
        Produz o veredito para o objeto.

        Falha fechada: conteúdo None (não pôde ser obtido) resulta em
        Invalid(EmptyContent) em vez de exceção.

        Args:
            ref: Objeto avaliado
            content: Conteúdo do objeto, ou None se a leitura falhou

        Returns:
            ValidationVerdict com o motivo da primeira regra que falhou
        """
        if content is None:
            logger.warning(f"Conteúdo indisponível para {ref}; tratado como vazio")
            return ValidationVerdict.invalid(
                InvalidReason.EMPTY_CONTENT,
                "Content could not be fetched"
            )

        for rule in self.rules:
            failure = rule.check(ref, content)
            if failure is not None:
                logger.info(f"{ref}: regra {rule.get_rule_name()} falhou: {failure}")
                return ValidationVerdict.invalid(rule.reason, failure)

        logger.info(f"{ref}: todas as {len(self.rules)} regras passaram")
        return ValidationVerdict.valid()
