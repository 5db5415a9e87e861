# File: ctrlgen/models.py
"""
ctrlgen - Configuration & Result Models
========================================
Pydantic V2 models for the generator configuration (naming conventions and
namespace roots) and for the values produced by a generation pass.

The configuration is consumed through a string-keyed lookup so that the
core only depends on keys such as ``request.namespace``::

    config = GeneratorConfig()
    config.get("request.apiNamespace")
    config.get("request.classSuffix", "Request")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ctrlgen.errors import ConfigError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("ctrlgen.models")

# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    frozen=False,
    extra="forbid",
)

_MISSING: Any = object()


def _validate_dotted_path(value: str) -> str:
    """Reject dotted paths with empty segments (``app..requests``)."""
    if value and any(not part for part in value.split(".")):
        raise ValueError(f"'{value}' is not a valid dotted path.")
    return value


# ---------------------------------------------------------------------------
# Configuration sections
# ---------------------------------------------------------------------------


class RequestConfig(BaseModel):
    """Where custom per-method request classes live and how they are named."""

    model_config = _SHARED_CONFIG

    namespace: str = Field(
        default="app.http.requests",
        description="Root namespace of request classes for web controllers.",
    )
    api_namespace: str = Field(
        default="app.http.requests.api",
        alias="apiNamespace",
        description="Root namespace of request classes for API controllers.",
    )
    class_suffix: str = Field(
        default="Request",
        alias="classSuffix",
        description="Suffix appended to the method name, e.g. 'StoreRequest'.",
    )

    @field_validator("namespace", "api_namespace")
    @classmethod
    def _dotted(cls, v: str) -> str:
        return _validate_dotted_path(v)


class ViewConfig(BaseModel):
    """Template rendering conventions for view-rendering methods."""

    model_config = _SHARED_CONFIG

    templates: str = Field(
        default="app.templating.templates",
        description="Qualified name of the Jinja2Templates instance.",
    )
    extension: str = Field(default=".html", description="Template file extension.")

    @field_validator("extension")
    @classmethod
    def _leading_dot(cls, v: str) -> str:
        if v and not v.startswith("."):
            return f".{v}"
        return v


class ApiConfig(BaseModel):
    """Response resource conventions for API methods."""

    model_config = _SHARED_CONFIG

    resource_namespace: str = Field(
        default="app.http.resources",
        alias="resourceNamespace",
        description="Root namespace of pydantic response resources.",
    )
    resource_suffix: str = Field(
        default="Resource",
        alias="resourceSuffix",
        description="Suffix appended to the model class name.",
    )

    @field_validator("resource_namespace")
    @classmethod
    def _dotted(cls, v: str) -> str:
        return _validate_dotted_path(v)


class ControllerConfig(BaseModel):
    """Shared dependencies emitted into every controller method."""

    model_config = _SHARED_CONFIG

    session_dependency: str = Field(
        default="app.database.get_db",
        alias="sessionDependency",
        description="Qualified name of the AsyncSession dependency.",
    )
    generate_docstrings: bool = Field(
        default=True,
        alias="generateDocstrings",
        description="Emit a one-line docstring in each generated method.",
    )
    indent_size: int = Field(default=4, ge=2, le=8, alias="indentSize")


class GeneratorConfig(BaseModel):
    """
    Root configuration object.

    ``root_namespace`` is prefixed to configured namespaces that are not
    already rooted under it (empty means "use namespaces verbatim").
    """

    model_config = _SHARED_CONFIG

    root_namespace: str = Field(default="", alias="rootNamespace")
    request: RequestConfig = Field(default_factory=RequestConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    controller: ControllerConfig = Field(default_factory=ControllerConfig)

    @field_validator("root_namespace")
    @classmethod
    def _dotted(cls, v: str) -> str:
        return _validate_dotted_path(v)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by dotted key, accepting field names or aliases.

        Returns *default* when any segment is missing.
        """
        node: Any = self
        for part in key.split("."):
            if not isinstance(node, BaseModel):
                return default
            value: Any = _lookup_field(node, part)
            if value is _MISSING:
                return default
            node = value
        return node

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        """Validate a raw mapping, raising ``ConfigError`` on failure."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid generator configuration: {exc}") from exc


def _lookup_field(node: BaseModel, part: str) -> Any:
    fields = type(node).model_fields
    if part in fields:
        return getattr(node, part)
    for name, info in fields.items():
        if info.alias == part:
            return getattr(node, name)
    return _MISSING


# ---------------------------------------------------------------------------
# Config file loading
# ---------------------------------------------------------------------------


def load_config_file(path: Path) -> GeneratorConfig:
    """
    Load a generator configuration from a YAML or JSON file.

    A top-level ``ctrlgen`` key is unwrapped when present so the settings
    can share a file with other tools.

    Raises:
        ConfigError: If the file is missing, unparsable or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    text: str = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data: Any = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot parse config file {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a mapping at top level of {path}, got {type(data).__name__}."
        )
    if isinstance(data.get("ctrlgen"), dict):
        data = data["ctrlgen"]

    logger.info("Loaded generator configuration from %s", path)
    return GeneratorConfig.from_dict(data)


# ---------------------------------------------------------------------------
# Generation results
# ---------------------------------------------------------------------------


class GeneratedMethod(BaseModel):
    """Code and imports produced by one controller method descriptor."""

    model_config = _SHARED_CONFIG

    method_name: str
    descriptor: str = Field(..., description="Qualified name of the descriptor class.")
    code: str = ""
    namespaces: List[str] = Field(default_factory=list)
    is_api: bool = False
    elapsed_seconds: float = Field(default=0.0, ge=0.0)

    @property
    def is_empty(self) -> bool:
        return not self.code

    def __repr__(self) -> str:
        return f"<GeneratedMethod {self.method_name} ({len(self.namespaces)} imports)>"


class MethodFailure(BaseModel):
    """A method whose generation raised; the pass continues without it."""

    model_config = _SHARED_CONFIG

    method_name: str
    error_type: str
    message: str
