"""
oxpecker_client.tier3_platform.endpoint
─────────────────────────────────────────
Declared endpoint contracts: HTTP method, path template, parameter record,
success and error response types. These are the generated part of the client;
the builder and decoder read them and never guess.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from oxpecker_client.tier0_core.http import Method
from oxpecker_client.tier1_runtime.validate import CallParameters, NoParameters

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True)
class Endpoint:
    """
    One operation of the API.

    ``params`` fields named in the path template are path parameters, the
    field named by ``body`` is sent as the JSON body, everything else goes to
    the query string. ``response_type=None`` means the success body is ignored.
    """

    operation_id: str
    method: Method
    path: str
    params: type[CallParameters] = NoParameters
    response_type: Any = None
    error_type: Any = None
    body: str | None = None

    def __post_init__(self) -> None:
        declared = set(self.params.model_fields)
        missing = [name for name in self.path_params if name not in declared]
        if missing:
            raise TypeError(
                f"{self.operation_id}: path placeholders {missing} are not declared "
                f"on {self.params.__name__}"
            )
        if self.body is not None and self.body not in declared:
            raise TypeError(
                f"{self.operation_id}: body parameter {self.body!r} is not declared "
                f"on {self.params.__name__}"
            )
        if self.body is not None and self.body in self.path_params:
            raise TypeError(f"{self.operation_id}: {self.body!r} cannot be both path and body")

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(_PLACEHOLDER.findall(self.path))

    @property
    def query_params(self) -> tuple[str, ...]:
        skip = {*self.path_params, self.body}
        return tuple(name for name in self.params.model_fields if name not in skip)


__all__ = ["Endpoint"]
