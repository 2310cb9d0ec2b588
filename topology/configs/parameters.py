"""
Parameter resolver.

Turns a sparse mapping of overrides into a validated TopologyParameters
value, applying defaults for absent keys. Absent and None are treated the
same way.

Dependencies: pydantic
System role: First stage of the composition pipeline
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from topology.configs.base import TopologyParameters
from topology.exceptions import InvalidParameter, UnrecognizedEngine

logger = logging.getLogger(__name__)

_FIELD_BY_ALIAS: dict[str, str] = {
    (info.alias or name): name for name, info in TopologyParameters.model_fields.items()
}


def resolve(raw: Mapping[str, Any] | None = None) -> TopologyParameters:
    """
    Validate and normalize user-supplied topology parameters.

    Args:
        raw: Sparse mapping of overrides, keyed by field name or camelCase alias

    Returns:
        TopologyParameters: Fully populated parameter value

    Raises:
        UnrecognizedEngine: If the data engine is not postgres or mysql
        InvalidParameter: If any other parameter is malformed or contradictory
    """
    overrides = {key: value for key, value in (raw or {}).items() if value is not None}

    try:
        params = TopologyParameters.model_validate(overrides)
    except ValidationError as e:
        raise _translate_error(e) from e

    logger.debug("Resolved topology parameters: %s", params.model_dump())
    return params


def _translate_error(error: ValidationError) -> InvalidParameter:
    """Map the first pydantic error onto the topology error hierarchy."""
    errors = error.errors(include_url=False, include_context=False)
    first = errors[0]

    if first["type"] == "unrecognized_engine":
        return UnrecognizedEngine(str(first["input"]))

    loc = [str(part) for part in first["loc"]]
    field = _FIELD_BY_ALIAS.get(loc[0], loc[0]) if loc else None
    return InvalidParameter(
        first["msg"],
        field=field,
        details={"errors": [f"{'.'.join(map(str, e['loc'])) or '<root>'}: {e['msg']}" for e in errors]},
    )
