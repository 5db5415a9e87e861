# File: ctrlgen/namespaces.py
"""
ctrlgen - Namespace Resolution
===============================
Computes fully qualified module paths from the configured roots and locates
the optional custom request class of a controller method.

Custom request classes are discovered by convention, never registered::

    <request root>.<StudlyTable>.<Ucfirst(method)><suffix>
    app.http.requests.BlogPosts.StoreRequest

When the class exists its import is handed back to the caller; otherwise
the generic ``Request`` is used and nothing needs importing.
"""

from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Any, Callable, Optional, Tuple

from ctrlgen.models import GeneratorConfig
from ctrlgen.utils import to_studly_case, ucfirst

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("ctrlgen.namespaces")

SEPARATOR: str = "."
FALLBACK_REQUEST_CLASS: str = "Request"
DEFAULT_CLASS_SUFFIX: str = "Request"

ClassExistsFn = Callable[[str], bool]


def class_exists(qualified_name: str) -> bool:
    """
    Return True if *qualified_name* names an importable class.

    The module part is imported; a missing module (or a missing parent
    package) counts as "does not exist".  Errors raised while executing an
    existing module propagate, including imports it cannot satisfy.
    """
    if any(not part for part in qualified_name.split(SEPARATOR)):
        return False
    module_name, _, attr = qualified_name.rpartition(SEPARATOR)
    if not module_name:
        return False
    try:
        module: ModuleType = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        if not _is_module_or_parent(exc.name, module_name):
            raise
        return False
    return isinstance(getattr(module, attr, None), type)


def _is_module_or_parent(missing: Optional[str], module_name: str) -> bool:
    if not missing:
        return False
    return module_name == missing or module_name.startswith(missing + SEPARATOR)


class NamespaceResolver:
    """
    Namespace computations bound to one configuration and one
    class-existence oracle.
    """

    __slots__ = ("_config", "_class_exists")

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        exists: Optional[ClassExistsFn] = None,
    ) -> None:
        self._config: GeneratorConfig = config or GeneratorConfig()
        self._class_exists: ClassExistsFn = exists or class_exists

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    def full_namespace(self, namespace: str) -> str:
        """Prefix the configured root namespace unless already rooted there."""
        root: str = self._config.get("rootNamespace", "")
        if not root or not namespace:
            return namespace or root
        if namespace == root or namespace.startswith(root + SEPARATOR):
            return namespace
        return f"{root}{SEPARATOR}{namespace}"

    def request_root(self, is_api: bool) -> str:
        key: str = "request.apiNamespace" if is_api else "request.namespace"
        return self.full_namespace(self._config.get(key, ""))

    def request_folder(self, root: str, table_name: str) -> str:
        """Folder (package) where a model's custom request classes live."""
        return self.qualify(root, to_studly_case(table_name))

    def resolve_custom_request_class(
        self,
        method_name: str,
        folder: str,
        class_suffix: Optional[str] = None,
    ) -> Tuple[str, Optional[str]]:
        """
        Return ``(class_name, import_to_register)`` for *method_name*.

        ``import_to_register`` is the fully qualified class path when a
        custom request class exists in *folder*, else None and the class
        name is the generic fallback.
        """
        if class_suffix is None:
            class_suffix = self._config.get("request.classSuffix", DEFAULT_CLASS_SUFFIX)
        candidate: str = ucfirst(method_name) + class_suffix
        full_path: str = f"{folder}{SEPARATOR}{candidate}"

        if self._class_exists(full_path):
            logger.debug("Custom request class found: %s", full_path)
            return candidate, full_path

        logger.debug(
            "No custom request class at %s; using %s.",
            full_path,
            FALLBACK_REQUEST_CLASS,
        )
        return FALLBACK_REQUEST_CLASS, None

    def qualify(self, *parts: Any) -> str:
        """Join non-empty parts with the namespace separator."""
        return SEPARATOR.join(str(p) for p in parts if p)
