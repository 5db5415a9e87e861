# File: ctrlgen/method.py
"""
ctrlgen - Controller Method Descriptor
=======================================
``ControllerMethod`` is the abstract base of every generated controller
method.  It holds the model (and optional parent model), resolves the
method name, locates the optional custom request class, accumulates the
imports the generated code needs, and dispatches to the generation
strategy its concrete subclass declares (see ``ctrlgen.contracts``).

Lifecycle::

    method = Store(BlogPost)            # construct (introspects the model)
    method.set_parent(Post)             # optional, registers Post's import
    code = method.get_code()            # generate
    imports = method.get_namespaces()   # imports, in accumulation order

A descriptor is a short-lived, single-threaded value: build one per
generation task and do not share it.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, List, Optional

from ctrlgen.contracts import (
    GenerationMode,
    is_api_response,
    resolve_generation_mode,
)
from ctrlgen.errors import ReflectionError
from ctrlgen.introspection import ModelIntrospector
from ctrlgen.models import GeneratorConfig
from ctrlgen.namespaces import ClassExistsFn, NamespaceResolver
from ctrlgen.utils import lcfirst

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("ctrlgen.method")


class ControllerMethod(abc.ABC):
    """
    Abstract controller method descriptor.

    Args:
        model: The main model of the controller.
        config: Naming conventions and namespace roots.  Defaults to
            ``GeneratorConfig()``.
        class_exists: Oracle telling whether a qualified class name exists.
            Defaults to ``ctrlgen.namespaces.class_exists``.

    Raises:
        ReflectionError: If the model's type metadata cannot be introspected.
    """

    def __init__(
        self,
        model: Any,
        config: Optional[GeneratorConfig] = None,
        class_exists: Optional[ClassExistsFn] = None,
    ) -> None:
        self._model_info: ModelIntrospector = ModelIntrospector(model)
        self._parent_info: Optional[ModelIntrospector] = None
        self._namespace_resolver: NamespaceResolver = NamespaceResolver(
            config, class_exists
        )
        self._method_name: Optional[str] = None
        self._namespaces: List[str] = []

        # Both fixed for the lifetime of the descriptor.
        self._is_api: bool = is_api_response(type(self))
        self._generation_mode: GenerationMode = resolve_generation_mode(type(self))

        request_root: str = self._namespace_resolver.request_root(self._is_api)
        self._request_folder_ns: str = self._namespace_resolver.request_folder(
            request_root, self._model_info.table_name()
        )
        logger.debug(
            "%s created for %s (mode=%s, api=%s, requests=%s).",
            type(self).__name__,
            self._model_info.qualified_name(),
            self._generation_mode.value,
            self._is_api,
            self._request_folder_ns,
        )

    # -- Read-only state ----------------------------------------------------

    @property
    def model(self) -> Any:
        return self._model_info.model

    @property
    def parent_model(self) -> Optional[Any]:
        return self._parent_info.model if self._parent_info else None

    @property
    def model_info(self) -> ModelIntrospector:
        return self._model_info

    @property
    def parent_info(self) -> Optional[ModelIntrospector]:
        return self._parent_info

    @property
    def namespace_resolver(self) -> NamespaceResolver:
        return self._namespace_resolver

    @property
    def config(self) -> GeneratorConfig:
        return self._namespace_resolver.config

    @property
    def is_api_response(self) -> bool:
        return self._is_api

    @property
    def generation_mode(self) -> GenerationMode:
        return self._generation_mode

    @property
    def request_folder_ns(self) -> str:
        """Package where this model's custom request classes are expected."""
        return self._request_folder_ns

    # -- Method name --------------------------------------------------------

    def get_method_name(self) -> str:
        """Explicit name if one was set (and non-empty), else the lcfirst class name."""
        if not self._method_name:
            self._method_name = lcfirst(type(self).__name__)
        return self._method_name

    def set_method_name(self, name: str) -> "ControllerMethod":
        self._method_name = name
        return self

    # -- Parent -------------------------------------------------------------

    def set_parent(self, parent_model: Any) -> "ControllerMethod":
        """
        Attach a parent model (e.g. ``Post`` for a ``Comment`` controller).

        The parent's qualified name is appended to the namespaces every
        time, even when already present.
        """
        self._parent_info = ModelIntrospector(parent_model)
        self._namespaces.append(self._parent_info.qualified_name())
        return self

    def has_parent(self) -> bool:
        return self._parent_info is not None

    # -- Generation ---------------------------------------------------------

    def before_generate(self) -> "ControllerMethod":
        """Hook run right before the generation strategy.  No-op by default."""
        return self

    def get_code(self) -> str:
        """
        Generate the method source.

        Returns an empty string when the subclass declares no generation
        capability.
        """
        if self._generation_mode is GenerationMode.VIEW:
            return self.before_generate().generate_view_code()  # type: ignore[attr-defined]
        if self._generation_mode is GenerationMode.REDIRECT:
            return self.before_generate().generate_redirect_able_code()  # type: ignore[attr-defined]
        logger.debug(
            "%s declares no generation capability; nothing to emit.",
            type(self).__name__,
        )
        return ""

    def get_namespaces(self) -> List[str]:
        return self._namespaces

    # -- Helpers for generation strategies ------------------------------------

    def add_namespace(self, *names: str) -> "ControllerMethod":
        self._namespaces.extend(names)
        return self

    def get_request_class(self) -> str:
        """
        Name of the request class the generated method should accept.

        Registers the import of a custom request class when one exists.
        """
        class_name, import_path = self._namespace_resolver.resolve_custom_request_class(
            self.get_method_name(),
            self._request_folder_ns,
        )
        if import_path is not None:
            self._namespaces.append(import_path)
        return class_name

    def get_model_short_name(self) -> str:
        return self._model_info.short_name()

    def get_parent_short_name(self) -> str:
        if self._parent_info is None:
            raise ReflectionError(
                f"{type(self).__name__} has no parent model; call set_parent() first."
            )
        return self._parent_info.short_name()

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.get_method_name()} "
            f"model={self._model_info.qualified_name()}>"
        )
