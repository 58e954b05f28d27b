"""Request/response schemas for calculator endpoints."""

from pydantic import BaseModel, Field

OPERAND_MIN = -999_999_999.0
OPERAND_MAX = 999_999_999.0


class CalculationRequest(BaseModel):
    """Two operands for a binary arithmetic operation."""

    number1: float = Field(..., ge=OPERAND_MIN, le=OPERAND_MAX, description="First number")
    number2: float = Field(..., ge=OPERAND_MIN, le=OPERAND_MAX, description="Second number")


class CalculationResponse(BaseModel):
    """Operands, result and the name of the operation performed."""

    number1: float
    number2: float
    result: float
    operation: str = Field(..., description="addition, subtraction, multiplication or division")
    message: str = "Calculation completed successfully"
