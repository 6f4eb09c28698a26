"""Shared helpers for request contracts."""

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError

from swapgate.errors import RequestValidationFailed

ModelT = TypeVar("ModelT", bound="StrictContract")


def _integral_number(value: Any) -> Any:
    # JSON has one number type: 50.0 is the integer 50, 50.5 is not
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


JSONInt = Annotated[int, BeforeValidator(_integral_number)]


class StrictContract(BaseModel):
    """Base for request bodies.

    Types are checked as a JSON schema would: no string-to-number or
    number-to-string coercion. Fields are only read under their JSON
    (camelCase) names; anything else is dropped.
    """

    model_config = ConfigDict(
        strict=True,
        extra="ignore",
    )


def format_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into ``field: reason; field: reason``."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "body"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def parse_contract(model: type[ModelT], payload: Any) -> ModelT:
    """Validate a decoded JSON payload against a contract.

    Raises:
        RequestValidationFailed: with a human-readable message
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationFailed(format_validation_error(e)) from e
