"""Input validation shared by resolvers."""

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import InvalidInput

InputModel = TypeVar("InputModel", bound=BaseModel)


def validate_input(model: type[InputModel], **values) -> InputModel:
    """
    Validate raw arguments against ``model``.

    Raises:
        InvalidInput: With one ``field: reason`` entry per failed field
    """
    try:
        return model.model_validate(values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidInput(f"Invalid input: {problems}") from e


def parse_id(value: str | int) -> int:
    """
    Parse a record identifier.

    Only plain ASCII digits are accepted; ids too large to be stored are
    returned as-is and simply match no record.

    Raises:
        InvalidInput: If ``value`` is not a positive integer
    """
    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidInput(f"Invalid id: {value!r}")
    try:
        parsed = int(text)
    except ValueError as e:
        # Beyond the interpreter's int conversion digit limit
        raise InvalidInput(f"Invalid id: {value!r}") from e
    if parsed < 1:
        raise InvalidInput(f"Invalid id: {value!r}")
    return parsed
