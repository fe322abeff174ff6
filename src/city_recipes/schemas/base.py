"""Shared Pydantic bases for the wire formats of the service.

Field names are snake_case in Python and camelCase on the wire
(``known_for`` <-> ``knownFor``, ``request_id`` <-> ``requestId``).
Which side owns a model decides how unknown fields are treated:

- ``APIRequest``: bodies sent by API clients, unknown fields ignored.
- ``APIResponse``: bodies we return, unknown fields rejected.
- ``DownstreamResponse``: payloads from the city directory, unknown fields
  ignored so upstream additions do not break lookups.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelCaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
        use_enum_values=True,
        validate_default=True,
    )


class APIRequest(_CamelCaseModel):
    """Incoming request body."""

    model_config = ConfigDict(extra="ignore")


class APIResponse(_CamelCaseModel):
    """Outgoing response body."""

    model_config = ConfigDict(extra="forbid")


class DownstreamResponse(_CamelCaseModel):
    """Payload received from the upstream city API."""

    model_config = ConfigDict(extra="ignore")
