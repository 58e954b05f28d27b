"""Unit tests for app.services.calculator."""

import unittest

from pydantic import ValidationError

from app.schemas.calculator import CalculationRequest
from app.services import calculator
from app.services.calculator import DivisionByZeroError


def _req(number1: float, number2: float) -> CalculationRequest:
    return CalculationRequest(number1=number1, number2=number2)


class TestOperations(unittest.TestCase):
    def test_add(self) -> None:
        out = calculator.add(_req(2, 3))
        self.assertEqual(out.result, 5)
        self.assertEqual(out.operation, "addition")
        self.assertEqual((out.number1, out.number2), (2, 3))

    def test_subtract(self) -> None:
        out = calculator.subtract(_req(2, 5))
        self.assertEqual(out.result, -3)
        self.assertEqual(out.operation, "subtraction")

    def test_multiply(self) -> None:
        out = calculator.multiply(_req(-4, 2.5))
        self.assertEqual(out.result, -10)
        self.assertEqual(out.operation, "multiplication")

    def test_divide(self) -> None:
        out = calculator.divide(_req(10, 4))
        self.assertEqual(out.result, 2.5)
        self.assertEqual(out.operation, "division")

    def test_divide_by_zero(self) -> None:
        with self.assertRaises(DivisionByZeroError) as ctx:
            calculator.divide(_req(1, 0))
        self.assertEqual(ctx.exception.message, "Division by zero is not allowed")

    def test_result_message(self) -> None:
        self.assertEqual(calculator.add(_req(1, 1)).message, "Calculation completed successfully")


class TestOperandBounds(unittest.TestCase):
    def test_bounds_are_inclusive(self) -> None:
        out = calculator.add(_req(999_999_999, -999_999_999))
        self.assertEqual(out.result, 0)

    def test_out_of_range_operand_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _req(1_000_000_000, 1)
        with self.assertRaises(ValidationError):
            _req(1, -1_000_000_000)


if __name__ == "__main__":
    unittest.main()
