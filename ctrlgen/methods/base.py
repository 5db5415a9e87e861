# File: ctrlgen/methods/base.py
"""
ctrlgen - Shared template plumbing for the bundled resource methods.

Every generated method is an ``async def`` on a controller class, taking
an ``AsyncSession`` through FastAPI's ``Depends``.  The helpers below build
the recurring fragments (signature, parent lookup, record lookup, input
decoding) as lists of lines; the concrete methods only arrange them.

**Performance contract:**
    - All string assembly uses ``List[str]`` + ``"\\n".join()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from ctrlgen.method import ControllerMethod
from ctrlgen.models import GeneratorConfig
from ctrlgen.namespaces import FALLBACK_REQUEST_CLASS, ClassExistsFn
from ctrlgen.utils import indent, to_plural, to_snake_case, to_title_human

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("ctrlgen.methods")


@dataclass(frozen=True, slots=True)
class ResourceNames:
    """Identifiers used inside one generated method."""

    model_class: str
    model_var: str
    collection_var: str
    key: str
    label: str
    table: str
    parent_class: Optional[str] = None
    parent_var: Optional[str] = None
    parent_key: Optional[str] = None

    @property
    def has_parent(self) -> bool:
        return self.parent_class is not None


class ResourceMethod(ControllerMethod):
    """Base class of the bundled CRUD controller methods."""

    def __init__(
        self,
        model: Any,
        config: Optional[GeneratorConfig] = None,
        class_exists: Optional[ClassExistsFn] = None,
    ) -> None:
        super().__init__(model, config, class_exists)
        self._names: Optional[ResourceNames] = None
        self._indent: str = " " * self.config.controller.indent_size

    # -- Setup --------------------------------------------------------------

    def before_generate(self) -> "ResourceMethod":
        info = self.model_info
        model_var: str = to_snake_case(self.get_model_short_name())
        parent_class: Optional[str] = None
        parent_var: Optional[str] = None
        if self.parent_info is not None:
            parent_class = self.parent_info.class_name()
            parent_var = to_snake_case(self.get_parent_short_name())
            # Self-referencing resources (a category inside a category).
            if parent_var == model_var:
                parent_var = f"parent_{parent_var}"

        self._names = ResourceNames(
            model_class=info.class_name(),
            model_var=model_var,
            collection_var=to_plural(model_var),
            key=f"{model_var}_id",
            label=to_title_human(model_var),
            table=info.table_name(),
            parent_class=parent_class,
            parent_var=parent_var,
            parent_key=f"{parent_var}_id" if parent_var else None,
        )
        self.add_namespace(
            info.qualified_name(),
            "fastapi.Depends",
            "sqlalchemy.ext.asyncio.AsyncSession",
            self.config.controller.session_dependency,
        )
        return self

    @property
    def names(self) -> ResourceNames:
        if self._names is None:
            raise RuntimeError("before_generate() has not run yet.")
        return self._names

    @property
    def session_dependency_name(self) -> str:
        return self.config.controller.session_dependency.rpartition(".")[2]

    # -- Fragments ----------------------------------------------------------

    def signature(self, params: Sequence[str], returns: str) -> List[str]:
        """``async def`` header with one parameter per line and the session last."""
        lines: List[str] = [f"async def {self.get_method_name()}("]
        lines.append(f"{self._indent}self,")
        lines.extend(f"{self._indent}{param}," for param in params)
        lines.append(
            f"{self._indent}db: AsyncSession = Depends({self.session_dependency_name}),"
        )
        lines.append(f") -> {returns}:")
        return lines

    def route_params(self, with_key: bool) -> List[str]:
        """Path parameters: the parent key first, then the record key."""
        params: List[str] = []
        if self.names.has_parent:
            params.append(f"{self.names.parent_key}: int")
        if with_key:
            params.append(f"{self.names.key}: int")
        return params

    def docstring(self, text: str) -> List[str]:
        if not self.config.controller.generate_docstrings:
            return []
        return [f'"""{text}"""']

    def parent_lookup(self) -> List[str]:
        """Load the parent record, 404 when missing."""
        n: ResourceNames = self.names
        if not n.has_parent:
            return []
        self.add_namespace("fastapi.HTTPException")
        return [
            f"{n.parent_var} = await db.get({n.parent_class}, {n.parent_key})",
            f"if {n.parent_var} is None:",
            f"{self._indent}raise HTTPException(status_code=404, "
            f'detail="{to_title_human(n.parent_var or "")} not found.")',
        ]

    def select_statement(self, by_key: bool) -> List[str]:
        n: ResourceNames = self.names
        self.add_namespace("sqlalchemy.select")
        stmt: str = f"stmt = select({n.model_class})"
        if by_key:
            stmt += f".where({n.model_class}.id == {n.key})"
        if n.has_parent:
            stmt += f".where({n.model_class}.{n.parent_key} == {n.parent_var}.id)"
        return [stmt]

    def record_lookup(self) -> List[str]:
        """Load the record addressed by the path key (scoped to the parent), 404 when missing."""
        n: ResourceNames = self.names
        self.add_namespace("fastapi.HTTPException")
        lines: List[str] = self.select_statement(by_key=True)
        lines.extend([
            f"{n.model_var} = (await db.execute(stmt)).scalar_one_or_none()",
            f"if {n.model_var} is None:",
            f"{self._indent}raise HTTPException(status_code=404, "
            f'detail="{n.label} not found.")',
        ])
        return lines

    def collection_lookup(self) -> List[str]:
        n: ResourceNames = self.names
        lines: List[str] = self.select_statement(by_key=False)
        lines.append(f"{n.collection_var} = (await db.execute(stmt)).scalars().all()")
        return lines

    def request_input(self) -> Tuple[List[str], List[str]]:
        """
        Parameters and body lines that decode the submitted data into ``data``.

        Uses the custom request class as a typed ``payload`` when one
        exists, else reads the raw request (form for web, JSON for API).
        Web methods always take ``request`` themselves.
        """
        request_class: str = self.get_request_class()
        if request_class != FALLBACK_REQUEST_CLASS:
            return (
                [f"payload: {request_class}"],
                ["data = payload.model_dump(exclude_unset=True)"],
            )
        if self.is_api_response:
            self.add_namespace("fastapi.Request")
            return ["request: Request"], ["data = await request.json()"]
        return [], ["data = dict(await request.form())"]

    def persist(self, refresh: bool = True) -> List[str]:
        lines: List[str] = ["await db.commit()"]
        if refresh:
            lines.append(f"await db.refresh({self.names.model_var})")
        return lines

    def render(self, header: Sequence[str], body: Sequence[str]) -> str:
        """Join a header and body into a method indented as a class member."""
        lines: List[str] = list(header)
        lines.extend(f"{self._indent}{line}" for line in body)
        code: str = "\n".join(lines)
        logger.debug(
            "Generated %s for %s: %d lines.",
            self.get_method_name(),
            self.names.model_class,
            len(lines),
        )
        return indent(code, 1, self.config.controller.indent_size)
