"""Calculator endpoints: add, subtract, multiply and divide two numbers."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from app.api import responses
from app.schemas.calculator import (
    OPERAND_MAX,
    OPERAND_MIN,
    CalculationRequest,
    CalculationResponse,
)
from app.schemas.common import ApiResponse
from app.services import calculator
from app.services.calculator import DivisionByZeroError

logger = logging.getLogger(__name__)

CALCULATOR_HEALTH_MESSAGE = "Calculator API is running!"

router = APIRouter()


def _calculate(
    operation: Callable[[CalculationRequest], CalculationResponse],
    label: str,
    body: CalculationRequest,
    request: Request,
) -> JSONResponse:
    logger.info("%s requested: number1=%s number2=%s", label, body.number1, body.number2)
    try:
        result = operation(body)
    except DivisionByZeroError as e:
        return responses.bad_request(e.message, request.url.path)
    return responses.success(result, f"{label} completed successfully", request.url.path)


@router.post("/add", response_model=ApiResponse)
def add(body: CalculationRequest, request: Request) -> JSONResponse:
    """Add number2 to number1."""
    return _calculate(calculator.add, "Addition", body, request)


@router.get("/add", response_model=ApiResponse)
def add_simple(
    request: Request,
    number1: Annotated[float, Query(ge=OPERAND_MIN, le=OPERAND_MAX)],
    number2: Annotated[float, Query(ge=OPERAND_MIN, le=OPERAND_MAX)],
) -> JSONResponse:
    """Addition with query parameters, for quick manual testing."""
    body = CalculationRequest(number1=number1, number2=number2)
    return _calculate(calculator.add, "Addition", body, request)


@router.post("/subtract", response_model=ApiResponse)
def subtract(body: CalculationRequest, request: Request) -> JSONResponse:
    """Subtract number2 from number1."""
    return _calculate(calculator.subtract, "Subtraction", body, request)


@router.post("/multiply", response_model=ApiResponse)
def multiply(body: CalculationRequest, request: Request) -> JSONResponse:
    return _calculate(calculator.multiply, "Multiplication", body, request)


@router.post("/divide", response_model=ApiResponse)
def divide(body: CalculationRequest, request: Request) -> JSONResponse:
    """Divide number1 by number2. Division by zero is a 400."""
    return _calculate(calculator.divide, "Division", body, request)


@router.get("/health", response_model=ApiResponse)
def health(request: Request) -> JSONResponse:
    return responses.success(
        CALCULATOR_HEALTH_MESSAGE, CALCULATOR_HEALTH_MESSAGE, request.url.path
    )
