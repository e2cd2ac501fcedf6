# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models describing the capabilities a charm registers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RelationDescriptor(BaseModel):
    """Relation declared by a charm's hook registry."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(default="", alias="Name")
    role: str = Field(default="", alias="Role")
    interface: str = Field(default="", alias="Interface")
    optional: bool = Field(default=False, alias="Optional")
    limit: int = Field(default=0, alias="Limit")
    scope: str = Field(default="", alias="Scope")


class OptionDescriptor(BaseModel):
    """Configuration option declared by a charm's hook registry."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    type: str = Field(default="", alias="Type")
    description: str = Field(default="", alias="Description")
    default: Any = Field(default=None, alias="Default")


class CapabilityDescriptor(BaseModel):
    """Hooks, relations and config options reported by the capability probe.

    The wire form is the probe's JSON document::

        {"Hooks": {"install": true}, "Relations": {...}, "Config": {...}}

    ``null`` sections decode as empty and unknown keys are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    hooks: frozenset[str] = Field(default_factory=frozenset, alias="Hooks")
    relations: dict[str, RelationDescriptor] = Field(default_factory=dict, alias="Relations")
    config: dict[str, OptionDescriptor] = Field(default_factory=dict, alias="Config")

    @field_validator("hooks", mode="before")
    @classmethod
    def _hook_names(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, Mapping):
            return frozenset(name for name, enabled in value.items() if enabled)
        return value

    @field_validator("relations", "config", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_wire(self) -> dict[str, Any]:
        """Return the descriptor in the probe's JSON layout."""

        return {
            "Hooks": {name: True for name in sorted(self.hooks)},
            "Relations": {
                name: relation.model_dump(by_alias=True) for name, relation in sorted(self.relations.items())
            },
            "Config": {name: option.model_dump(by_alias=True) for name, option in sorted(self.config.items())},
        }


__all__ = ["CapabilityDescriptor", "OptionDescriptor", "RelationDescriptor"]
