# File: ctrlgen/generator.py
"""
ctrlgen - Generation Orchestrator
==================================
Drives a set of controller method descriptors for one model:

    Model (+ parent) → descriptor per method → code + imports → report

Error handling strategy:
    - Errors are isolated per method: a method whose model cannot be
      introspected is recorded in the report and the remaining methods are
      still generated.
    - Unknown method names are recorded the same way.
    - The report gives a clear pass/fail verdict and can render the
      generated methods behind one de-duplicated import block.
"""

from __future__ import annotations

import importlib
import logging
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ctrlgen.errors import CtrlgenError, ReflectionError
from ctrlgen.method import ControllerMethod
from ctrlgen.methods import available_methods, resolve_method_class
from ctrlgen.models import GeneratedMethod, GeneratorConfig, MethodFailure
from ctrlgen.namespaces import ClassExistsFn
from ctrlgen.utils import Timer, build_namespace_imports

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("ctrlgen.generator")


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """Outcome of ``ControllerGenerator.generate()`` for one model."""

    model: str = ""
    parent: Optional[str] = None
    is_api: bool = False
    methods: List[GeneratedMethod] = field(default_factory=list)
    failures: List[MethodFailure] = field(default_factory=list)
    total_elapsed_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def namespaces(self) -> List[str]:
        """Every registered import in generation order (duplicates kept)."""
        collected: List[str] = []
        for method in self.methods:
            collected.extend(method.namespaces)
        return collected

    def import_block(self) -> str:
        return build_namespace_imports(self.namespaces)

    def render(self) -> str:
        """Import block followed by every non-empty method, blank-line separated."""
        parts: List[str] = []
        imports: str = self.import_block()
        if imports:
            parts.append(imports)
        parts.extend(m.code for m in self.methods if not m.is_empty)
        return "\n\n".join(parts) + "\n"

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "SUCCESS" if self.success else "FAILED"
        kind: str = "API" if self.is_api else "web"
        lines.append(f"{'='*60}")
        lines.append("  ctrlgen — Generation Report")
        lines.append(f"{'='*60}")
        lines.append(f"  Status:     {status}")
        lines.append(f"  Model:      {self.model}")
        if self.parent:
            lines.append(f"  Parent:     {self.parent}")
        lines.append(f"  Controller: {kind}")
        lines.append(f"  Methods:    {len(self.methods)}")
        lines.append(f"  Time:       {self.total_elapsed_seconds:.3f}s")

        if self.methods:
            lines.append(f"{'─'*60}")
            for method in self.methods:
                icon: str = "⊘" if method.is_empty else "✓"
                lines.append(
                    f"    {icon} {method.method_name:<16s} "
                    f"{len(method.namespaces):>3d} import(s) "
                    f"{method.elapsed_seconds * 1000:>7.2f}ms"
                )

        if self.failures:
            lines.append(f"{'─'*60}")
            lines.append(f"  Failures ({len(self.failures)}):")
            for failure in self.failures:
                lines.append(
                    f"    ✗ {failure.method_name}: "
                    f"{failure.error_type}: {failure.message}"
                )

        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Model loading
# ---------------------------------------------------------------------------


def load_object(path: str) -> Any:
    """
    Import ``package.module:Name`` (or ``package.module.Name``).

    Raises:
        ReflectionError: If the module or attribute cannot be found.
    """
    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ReflectionError(
            f"'{path}' is not an import path; expected 'package.module:Name'."
        )
    try:
        module: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ReflectionError(f"Cannot import module '{module_name}': {exc}") from exc

    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ReflectionError(
                f"Module '{module_name}' has no attribute '{attr}'."
            ) from exc
    return obj


# ---------------------------------------------------------------------------
# ControllerGenerator
# ---------------------------------------------------------------------------


class ControllerGenerator:
    """
    Generates controller methods for a model.

    Usage::

        generator = ControllerGenerator(GeneratorConfig())
        report = generator.generate(Comment, ["index", "store"], parent=Post)
        print(report.render())

    The generator is reusable; a fresh descriptor is built for every method.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        class_exists: Optional[ClassExistsFn] = None,
    ) -> None:
        self._config: GeneratorConfig = config or GeneratorConfig()
        self._class_exists: Optional[ClassExistsFn] = class_exists

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    def build_method(
        self,
        name: str,
        model: Any,
        *,
        parent: Optional[Any] = None,
        api: bool = False,
        method_name: Optional[str] = None,
    ) -> ControllerMethod:
        """Construct the descriptor registered under *name*."""
        method_cls = resolve_method_class(name, api)
        method: ControllerMethod = method_cls(model, self._config, self._class_exists)
        if method_name:
            method.set_method_name(method_name)
        if parent is not None:
            method.set_parent(parent)
        return method

    def generate_method(self, method: ControllerMethod) -> GeneratedMethod:
        """Run one descriptor through a generation pass."""
        with Timer(f"generate {method.get_method_name()}") as timer:
            code: str = method.get_code()
        return GeneratedMethod(
            method_name=method.get_method_name(),
            descriptor=f"{type(method).__module__}.{type(method).__qualname__}",
            code=code,
            namespaces=list(method.get_namespaces()),
            is_api=method.is_api_response,
            elapsed_seconds=timer.elapsed,
        )

    def generate(
        self,
        model: Any,
        methods: Optional[Sequence[str]] = None,
        *,
        parent: Optional[Any] = None,
        api: bool = False,
    ) -> GenerationReport:
        """
        Generate *methods* (default: every registered method) for *model*.

        Returns:
            GenerationReport; failures are recorded, never raised.
        """
        started: float = time.perf_counter()
        names: List[str] = list(methods) if methods else available_methods(api)
        report: GenerationReport = GenerationReport(
            model=_describe(model),
            parent=_describe(parent) if parent is not None else None,
            is_api=api,
        )

        for name in names:
            try:
                method: ControllerMethod = self.build_method(
                    name, model, parent=parent, api=api
                )
                report.methods.append(self.generate_method(method))
            except CtrlgenError as exc:
                logger.error("Generation of '%s' failed: %s", name, exc)
                report.failures.append(MethodFailure(
                    method_name=name,
                    error_type=type(exc).__name__,
                    message=str(exc),
                ))

        report.total_elapsed_seconds = time.perf_counter() - started
        logger.info(
            "Generated %d method(s) for %s with %d failure(s) in %.3fs.",
            len(report.methods),
            report.model,
            len(report.failures),
            report.total_elapsed_seconds,
        )
        return report


def _describe(model: Any) -> str:
    cls: type = model if isinstance(model, type) else type(model)
    return cls.__qualname__


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ControllerGenerator",
    "GenerationReport",
    "load_object",
]

logger.debug("ctrlgen.generator loaded.")
