"""Testes unitários para object_validation/business/predicates.py"""
import unittest
from unittest.mock import MagicMock

from object_validation.business.predicates import (
    NumericCodeInRange,
    ProductIdCode,
    predicate_from_config,
    register_predicate,
)


class TestNumericCodeInRange(unittest.TestCase):
    """Testes para NumericCodeInRange."""

    def test_default_matches_four_digit_code(self):
        predicate = NumericCodeInRange()
        self.assertTrue(predicate(b'report code 4471 attached'))

    def test_no_code(self):
        self.assertFalse(NumericCodeInRange()(b'no digits'))

    def test_code_out_of_range(self):
        predicate = NumericCodeInRange(minimum=5000, maximum=5999)
        self.assertFalse(predicate(b'code 4471'))
        self.assertTrue(predicate(b'code 4471 and 5123'))

    def test_longer_number_not_matched(self):
        """Testa que números maiores não casam com o padrão de 4 dígitos."""
        self.assertFalse(NumericCodeInRange()(b'id 123456'))

    def test_allowed_list(self):
        predicate = NumericCodeInRange(allowed=['4471'])
        self.assertTrue(predicate(b'4471'))
        self.assertFalse(predicate(b'4472'))

    def test_invalid_utf8_does_not_raise(self):
        self.assertTrue(NumericCodeInRange()(b'\xff\xfe 4471'))


class TestProductIdCode(unittest.TestCase):
    """Testes para ProductIdCode."""

    def test_matches_four_groups(self):
        self.assertTrue(ProductIdCode()(b'prod 12-3456-7-890 ok'))

    def test_rejects_three_groups(self):
        self.assertFalse(ProductIdCode()(b'prod 12-3456-7'))

    def test_rejects_five_groups(self):
        self.assertFalse(ProductIdCode()(b'1-2-3-4-5'))

    def test_invalid_groups(self):
        with self.assertRaises(ValueError):
            ProductIdCode(groups=0)


class TestPredicateFromConfig(unittest.TestCase):
    """Testes para predicate_from_config."""

    def _config(self, name):
        config = MagicMock()
        config.numeric_code_predicate = name
        config.numeric_code_pattern = r'\b\d{4}\b'
        config.numeric_code_min = 4000
        config.numeric_code_max = 4999
        config.numeric_code_allowed = []
        return config

    def test_range(self):
        predicate = predicate_from_config(self._config('range'))
        self.assertIsInstance(predicate, NumericCodeInRange)
        self.assertEqual(predicate.minimum, 4000)
        self.assertEqual(predicate.maximum, 4999)

    def test_product_id(self):
        self.assertIsInstance(predicate_from_config(self._config('PRODUCT_ID')), ProductIdCode)

    def test_unknown(self):
        with self.assertRaises(ValueError) as ctx:
            predicate_from_config(self._config('nope'))
        self.assertIn('range', str(ctx.exception))

    def test_register(self):
        register_predicate('always_true_for_test', lambda config: (lambda content: True))
        predicate = predicate_from_config(self._config('always_true_for_test'))
        self.assertTrue(predicate(b''))


if __name__ == '__main__':
    unittest.main()
