"""Testes unitários para object_validation/business/rule_evaluator.py"""
import unittest
from unittest.mock import MagicMock

from object_validation.business.predicates import NumericCodeInRange
from object_validation.business.rule_evaluator import (
    ContentLengthRule,
    ExtensionRule,
    RuleEvaluator,
    ValidationRule,
)
from object_validation.core.models import InvalidReason, ObjectRef


class TestRuleEvaluator(unittest.TestCase):
    """Testes para RuleEvaluator."""

    def setUp(self):
        """Setup para cada teste."""
        self.evaluator = RuleEvaluator(
            numeric_code_predicate=NumericCodeInRange(),
            expected_extension='txt'
        )

    def test_valid_object(self):
        """Testa objeto que passa em todas as regras."""
        ref = ObjectRef(bucket='b', key='reports/q1.txt', size=512)
        content = b'Quarterly report, code 4471\n' + b'x' * 484

        verdict = self.evaluator.evaluate(ref, content)

        self.assertTrue(verdict.is_valid)
        self.assertIsNone(verdict.reason)
        self.assertEqual(verdict.message, 'File is valid')

    def test_wrong_extension(self):
        """Testa objeto .csv."""
        ref = ObjectRef(bucket='b', key='reports/q1.csv', size=512)

        verdict = self.evaluator.evaluate(ref, b'code 4471')

        self.assertEqual(verdict.reason, InvalidReason.WRONG_EXTENSION)
        self.assertIn('.txt', verdict.message)

    def test_missing_extension(self):
        """Testa chave sem extensão."""
        verdict = self.evaluator.evaluate(ObjectRef(bucket='b', key='reports/q1'), b'4471')
        self.assertEqual(verdict.reason, InvalidReason.WRONG_EXTENSION)
        self.assertEqual(verdict.message, 'Missing file extension')

    def test_extension_case_insensitive(self):
        verdict = self.evaluator.evaluate(ObjectRef(bucket='b', key='Q1.TXT'), b'4471')
        self.assertTrue(verdict.is_valid)

    def test_empty_content_short_circuits(self):
        """Testa que conteúdo vazio falha antes das outras regras."""
        predicate = MagicMock(return_value=False)
        evaluator = RuleEvaluator(numeric_code_predicate=predicate)

        verdict = evaluator.evaluate(ObjectRef(bucket='b', key='empty.csv', size=0), b'')

        self.assertEqual(verdict.reason, InvalidReason.EMPTY_CONTENT)
        predicate.assert_not_called()

    def test_empty_content_regardless_of_extension_and_code(self):
        for key in ['empty.txt', 'empty.csv', 'empty']:
            verdict = self.evaluator.evaluate(ObjectRef(bucket='b', key=key), b'')
            self.assertEqual(verdict.reason, InvalidReason.EMPTY_CONTENT, key)

    def test_content_unavailable_fails_closed(self):
        """Testa que conteúdo None resulta em EmptyContent."""
        verdict = self.evaluator.evaluate(ObjectRef(bucket='b', key='q1.txt', size=10), None)

        self.assertEqual(verdict.reason, InvalidReason.EMPTY_CONTENT)
        self.assertEqual(verdict.message, 'Content could not be fetched')

    def test_failed_numeric_code(self):
        verdict = self.evaluator.evaluate(ObjectRef(bucket='b', key='q1.txt'), b'no code here')
        self.assertEqual(verdict.reason, InvalidReason.FAILED_NUMERIC_CODE)

    def test_extension_checked_before_code(self):
        """Testa ordem: extensão é avaliada antes do código."""
        predicate = MagicMock(return_value=False)
        evaluator = RuleEvaluator(numeric_code_predicate=predicate)

        verdict = evaluator.evaluate(ObjectRef(bucket='b', key='q1.csv'), b'abc')

        self.assertEqual(verdict.reason, InvalidReason.WRONG_EXTENSION)
        predicate.assert_not_called()

    def test_predicate_receives_content(self):
        predicate = MagicMock(return_value=True)
        evaluator = RuleEvaluator(numeric_code_predicate=predicate)

        evaluator.evaluate(ObjectRef(bucket='b', key='q1.txt'), b'payload')

        predicate.assert_called_once_with(b'payload')

    def test_custom_extension(self):
        evaluator = RuleEvaluator(numeric_code_predicate=lambda c: True, expected_extension='.csv')
        self.assertTrue(evaluator.evaluate(ObjectRef(bucket='b', key='q1.csv'), b'1').is_valid)

    def test_extra_rules_run_after_defaults(self):
        """Testa regras adicionais injetadas."""
        extra = MagicMock(spec=ValidationRule)
        extra.check.return_value = 'extra failed'
        extra.reason = InvalidReason.FAILED_NUMERIC_CODE
        extra.get_rule_name.return_value = 'Extra'
        evaluator = RuleEvaluator(numeric_code_predicate=lambda c: True, extra_rules=[extra])

        verdict = evaluator.evaluate(ObjectRef(bucket='b', key='q1.txt'), b'1')

        self.assertFalse(verdict.is_valid)
        self.assertEqual(verdict.message, 'extra failed')
        self.assertEqual(len(evaluator.rules), 4)


class TestRules(unittest.TestCase):
    """Testes das regras individuais."""

    def test_content_length_rule(self):
        rule = ContentLengthRule()
        ref = ObjectRef(bucket='b', key='a.txt')
        self.assertIsNone(rule.check(ref, b'a'))
        self.assertIsNotNone(rule.check(ref, b''))

    def test_extension_rule_uses_last_suffix(self):
        rule = ExtensionRule('txt')
        self.assertIsNone(rule.check(ObjectRef(bucket='b', key='dir.v2/archive.tar.txt'), b''))
        self.assertIsNotNone(rule.check(ObjectRef(bucket='b', key='dir.txt/archive'), b''))


if __name__ == '__main__':
    unittest.main()
