"""pydantic field type for Decimal.

Lets Decimal be used directly in pydantic models:

    class Invoice(BaseModel):
        total: DecimalField

Input may be a Decimal, an int, a float or a string in the decimal
grammar. Output is the canonical string, so amounts travel as text and
never pass through binary floating point.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from xdecimal.errors import InvalidDecimalString
from xdecimal.number import Decimal

__all__ = ["DecimalField", "validate_decimal"]


def validate_decimal(value: Any) -> Decimal:
    """Coerce a model input value to Decimal.

    Raises:
        ValueError: If value is malformed text or an unsupported type
    """
    if isinstance(value, Decimal):
        return value
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool):
        raise ValueError(f"Decimal must be string, int or float, got {type(value).__name__}")
    if isinstance(value, int):
        return Decimal.from_int(value)
    if isinstance(value, float):
        try:
            return Decimal.from_float(value)
        except InvalidDecimalString as err:
            raise ValueError(f"Decimal cannot be {value}") from err
    if not isinstance(value, str):
        raise ValueError(f"Decimal must be string, int or float, got {type(value).__name__}")
    result = Decimal.try_parse(value)
    if result is None:
        raise ValueError(f"Decimal must be a decimal string: '{value}'")
    return result


class _DecimalAnnotation:
    """Schema hooks for Decimal, which pydantic does not know natively."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            validate_decimal,
            serialization=core_schema.plain_serializer_function_ser_schema(str, return_schema=core_schema.str_schema()),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, _core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        json_schema = handler(core_schema.str_schema())
        json_schema.update(
            pattern=r"^[-+]?[0-9]+(\.[0-9]+)?([eE][-+]?[0-9]+)?$",
            description="Decimal number as string",
        )
        return json_schema


# Decimal accepted from str/int/float and serialized as canonical string
DecimalField = Annotated[Decimal, _DecimalAnnotation]
