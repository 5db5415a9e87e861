"""
ctrlgen — Controller Method Generator
======================================

Generates the source of controller methods for a web application from a
model's metadata: view-rendering methods, redirect-performing methods and
API-response methods, each together with the list of imports it needs.

Architecture overview::

    ┌──────────────┐     ┌─────────────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ ControllerGenerator │────▶│ ControllerMethod │
    │   (cli.py)   │     │   (generator.py)    │     │   (method.py)    │
    └──────────────┘     └─────────────────────┘     └────────┬─────────┘
                                                              │
                          ┌───────────────┬───────────────────┼──────────────┐
                          ▼               ▼                   ▼              ▼
                   ┌─────────────┐ ┌─────────────┐ ┌───────────────┐ ┌────────────┐
                   │introspection│ │ namespaces  │ │   contracts   │ │  methods/  │
                   │   (.py)     │ │   (.py)     │ │    (.py)      │ │ web / api  │
                   └─────────────┘ └─────────────┘ └───────────────┘ └────────────┘

Usage::

    # As a library
    from ctrlgen.methods.web import Store
    method = Store(BlogPost).set_parent(Post)
    print(method.get_code())
    print(method.get_namespaces())

    # From the command line
    python -m ctrlgen --model app.models:BlogPost --api

Public API:
    - ControllerMethod     — Abstract method descriptor
    - ViewAbleMethod       — View generation capability
    - RedirectAbleMethod   — Redirect generation capability
    - ApiResponseMethod    — API controller marker
    - ControllerGenerator  — Generates a set of methods for a model
    - GeneratorConfig      — Naming conventions and namespace roots
"""

from __future__ import annotations

__version__: str = "0.1.0"
__license__: str = "MIT"

from ctrlgen.contracts import (
    ApiResponseMethod,
    GenerationMode,
    RedirectAbleMethod,
    ViewAbleMethod,
)
from ctrlgen.errors import ConfigError, CtrlgenError, ReflectionError, UnknownMethodError
from ctrlgen.generator import ControllerGenerator, GenerationReport
from ctrlgen.introspection import ModelIntrospector
from ctrlgen.method import ControllerMethod
from ctrlgen.methods import available_methods, resolve_method_class
from ctrlgen.models import GeneratedMethod, GeneratorConfig, load_config_file
from ctrlgen.namespaces import NamespaceResolver, class_exists

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    # Version info
    "__version__",
    "__license__",
    # Core
    "ControllerMethod",
    "GenerationMode",
    "ViewAbleMethod",
    "RedirectAbleMethod",
    "ApiResponseMethod",
    # Resolution
    "ModelIntrospector",
    "NamespaceResolver",
    "class_exists",
    # Orchestration
    "ControllerGenerator",
    "GenerationReport",
    "GeneratedMethod",
    "available_methods",
    "resolve_method_class",
    # Configuration
    "GeneratorConfig",
    "load_config_file",
    # Errors
    "CtrlgenError",
    "ConfigError",
    "ReflectionError",
    "UnknownMethodError",
]
