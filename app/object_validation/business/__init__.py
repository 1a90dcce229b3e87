"""
Módulo de regras de validação e dispatch de resultados.
"""

from object_validation.business.rule_evaluator import RuleEvaluator, ValidationRule
from object_validation.business.result_dispatcher import ResultDispatcher

__all__ = ['RuleEvaluator', 'ValidationRule', 'ResultDispatcher']
