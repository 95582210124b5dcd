"""Configuration document schema and the loaded configuration object.

:class:`ConfigDocument` is the typed form of the YAML file. Unknown keys at
any level are ignored so newer files still load. :class:`Config` is what
the loader returns: the document plus the :class:`RuleSet` built from its
``paths`` list.

Example document
----------------
::

    version: "1.0"
    log_level: "info"
    log_path: "/var/log/mcpfs.json"
    paths:
      - path: "${HOME}/data"
        perms: ["read", "write"]
        allow_subpaths: true
        description: "free text"
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field

import yaml
from pydantic import BaseModel, Field, field_validator

from mcpfs.permissions.mask import Permission
from mcpfs.permissions.rule_set import RuleSet
from mcpfs.permissions.rules import CanonicalPathRule, DeclaredPathRule

CONFIG_VERSION_V1 = "1.0"


class ConfigDocument(BaseModel):
    """Top-level declarative configuration."""

    model_config = {"extra": "ignore"}

    version: str = Field(default="")
    paths: list[DeclaredPathRule] = Field(default_factory=list)
    log_level: str = Field(default="")
    log_path: str = Field(default="")

    @field_validator("version", mode="before")
    @classmethod
    def version_as_string(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("paths", mode="before")
    @classmethod
    def null_paths_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("log_level", "log_path", mode="before")
    @classmethod
    def null_string_as_empty(cls, value: object) -> object:
        return "" if value is None else value


@dataclass(frozen=True)
class Config:
    """A loaded, ready-to-query configuration.

    Attributes
    ----------
    document:
        The declarative document after environment expansion.
    rules:
        Canonical rules built from ``document.paths``, in declared order.
    source:
        Where the document came from (file path or caller-supplied label).
    """

    document: ConfigDocument = field(default_factory=ConfigDocument)
    rules: RuleSet = field(default_factory=RuleSet)
    source: str | None = None

    @property
    def version(self) -> str:
        return self.document.version or CONFIG_VERSION_V1

    @property
    def log_level(self) -> str:
        return self.document.log_level

    @property
    def log_path(self) -> str:
        return self.document.log_path

    @property
    def paths(self) -> tuple[CanonicalPathRule, ...]:
        return self.rules.rules

    def is_allowed(self, op: Permission, path: str) -> bool:
        """Return True if the loaded rules grant *op* on *path*."""
        return self.rules.is_allowed(op, path)

    def to_dict(self) -> dict[str, object]:
        """Return the declarative document as plain data."""
        return self.document.model_dump(exclude_none=True)

    def to_yaml(self) -> str:
        """Serialize the declarative document to YAML."""
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)

    def to_json(self) -> str:
        """Serialize the declarative document to JSON."""
        return json.dumps(self.to_dict())
