"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary; the core assumes well-typed input
    - Closed vocabularies (Emotion, DeviceType, DeviceCommand) enforced here
    - JSON field names are camelCase; snake_case accepted on input too

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - to_domain() on request schemas: conversion lives next to validation
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )
