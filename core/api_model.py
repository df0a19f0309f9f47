#!/usr/bin/env python3
"""
Base model for HTTP payloads

JSON on the wire is camelCase, Python attributes stay snake_case.
Both spellings are accepted on input.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Pydantic model serialized with camelCase aliases"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
