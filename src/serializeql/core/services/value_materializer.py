"""Materialization of @serialize key arguments.

Turns the argument value nodes of a key list into plain Python values
and encodes them as the canonical key string.
"""

import json
from collections.abc import Mapping
from typing import Any

from graphql import (
    BooleanValueNode,
    EnumValueNode,
    FloatValueNode,
    IntValueNode,
    ListValueNode,
    StringValueNode,
    ValueNode,
    VariableNode,
)

from serializeql.core.exceptions import (
    InvalidKeyValueError,
    MissingVariableError,
    UnsupportedArgumentKindError,
)

DEFAULT_DIRECTIVE_NAME = "serialize"


def get_variable_or_raise(
    variables: Mapping[str, Any] | None,
    name: str,
    directive_name: str = DEFAULT_DIRECTIVE_NAME,
) -> Any:
    """Look up a variable value referenced by a key.

    Args:
        variables: The operation's variables, if any.
        name: The variable name without the leading ``$``.
        directive_name: Directive name used in the error message.

    Returns:
        The raw runtime value.

    Raises:
        MissingVariableError: If variables is None or lacks name.
    """
    if variables is None or name not in variables:
        raise MissingVariableError(name, directive_name)
    return variables[name]


def value_for_argument(
    value: ValueNode,
    variables: Mapping[str, Any] | None = None,
    directive_name: str = DEFAULT_DIRECTIVE_NAME,
) -> Any:
    """Convert one key list element into a Python value.

    Variables resolve to their runtime value unchanged; int and float
    literals are parsed; string, boolean and enum literals keep their
    literal value.

    Args:
        value: The argument value node.
        variables: The operation's variables.
        directive_name: Directive name used in error messages.

    Returns:
        A JSON-encodable value.

    Raises:
        MissingVariableError: If a referenced variable is not supplied.
        UnsupportedArgumentKindError: For list, object and null values.
    """
    if isinstance(value, VariableNode):
        return get_variable_or_raise(variables, value.name.value, directive_name)
    if isinstance(value, IntValueNode):
        return int(value.value, 10)
    if isinstance(value, FloatValueNode):
        return float(value.value)
    if isinstance(value, (StringValueNode, BooleanValueNode, EnumValueNode)):
        return value.value
    raise UnsupportedArgumentKindError(value.kind, directive_name)


def materialize_key(
    arguments: ListValueNode,
    variables: Mapping[str, Any] | None = None,
    directive_name: str = DEFAULT_DIRECTIVE_NAME,
) -> str:
    """Build the key string for a key argument list.

    Args:
        arguments: The list value of the directive's key argument.
        variables: The operation's variables.
        directive_name: Directive name used in error messages.

    Returns:
        The compact JSON array of the materialized values,
        e.g. ``[1,"a",true]``.

    Raises:
        InvalidKeyValueError: If a variable value is not JSON-encodable,
            including NaN and infinite floats.
    """
    values = [
        value_for_argument(value, variables, directive_name)
        for value in arguments.values
    ]
    try:
        return json.dumps(
            values, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise InvalidKeyValueError(str(e), directive_name) from e
