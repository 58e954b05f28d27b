"""Stateless arithmetic on two operands."""

import logging

from app.schemas.calculator import CalculationRequest, CalculationResponse

logger = logging.getLogger(__name__)


class DivisionByZeroError(ValueError):
    """Raised when the divisor is zero."""

    def __init__(self, message: str = "Division by zero is not allowed") -> None:
        self.message = message
        super().__init__(message)


def add(body: CalculationRequest) -> CalculationResponse:
    result = body.number1 + body.number2
    logger.debug("Addition: %s + %s = %s", body.number1, body.number2, result)
    return CalculationResponse(
        number1=body.number1, number2=body.number2, result=result, operation="addition"
    )


def subtract(body: CalculationRequest) -> CalculationResponse:
    result = body.number1 - body.number2
    logger.debug("Subtraction: %s - %s = %s", body.number1, body.number2, result)
    return CalculationResponse(
        number1=body.number1, number2=body.number2, result=result, operation="subtraction"
    )


def multiply(body: CalculationRequest) -> CalculationResponse:
    result = body.number1 * body.number2
    logger.debug("Multiplication: %s * %s = %s", body.number1, body.number2, result)
    return CalculationResponse(
        number1=body.number1, number2=body.number2, result=result, operation="multiplication"
    )


def divide(body: CalculationRequest) -> CalculationResponse:
    """Raises DivisionByZeroError when number2 is zero."""
    if body.number2 == 0:
        logger.warning("Division by zero attempted: %s / %s", body.number1, body.number2)
        raise DivisionByZeroError()
    result = body.number1 / body.number2
    logger.debug("Division: %s / %s = %s", body.number1, body.number2, result)
    return CalculationResponse(
        number1=body.number1, number2=body.number2, result=result, operation="division"
    )
