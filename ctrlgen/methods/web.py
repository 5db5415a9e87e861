# File: ctrlgen/methods/web.py
"""
ctrlgen - Web controller methods.

View methods render a Jinja2 template named ``<table>/<method><ext>``;
redirect methods write through the session and answer with a 303 redirect
to a named route (``<table>.show`` / ``<table>.index``).
"""

from __future__ import annotations

from typing import Dict, List

from ctrlgen.contracts import RedirectAbleMethod, ViewAbleMethod
from ctrlgen.methods.base import ResourceMethod, ResourceNames


class WebMethod(ResourceMethod):
    """Helpers shared by the web (HTML) controller methods."""

    def before_generate(self) -> "WebMethod":
        super().before_generate()
        self.add_namespace("fastapi.Request")
        return self

    @property
    def templates_name(self) -> str:
        return self.config.view.templates.rpartition(".")[2]

    def view_name(self) -> str:
        return f"{self.names.table}/{self.get_method_name()}{self.config.view.extension}"

    def template_response(self, context: Dict[str, str]) -> List[str]:
        self.add_namespace(self.config.view.templates)
        n: ResourceNames = self.names
        if n.has_parent:
            context = {**context, n.parent_var: n.parent_var}
        items: str = ", ".join(f'"{key}": {value}' for key, value in context.items())
        return [
            f"return {self.templates_name}.TemplateResponse(",
            f"{self._indent}request,",
            f'{self._indent}"{self.view_name()}",',
            f"{self._indent}{{{items}}},",
            ")",
        ]

    def redirect_to(self, route: str, with_key: bool) -> List[str]:
        n: ResourceNames = self.names
        args: List[str] = [f'"{n.table}.{route}"']
        if n.has_parent:
            args.append(f"{n.parent_key}={n.parent_var}.id")
        if with_key:
            args.append(f"{n.key}={n.model_var}.id")
        return [
            "return RedirectResponse(",
            f"{self._indent}request.url_for({', '.join(args)}),",
            f"{self._indent}status_code=303,",
            ")",
        ]

    def view_header(self, with_key: bool) -> List[str]:
        self.add_namespace("fastapi.responses.HTMLResponse")
        return self.signature(["request: Request", *self.route_params(with_key)], "HTMLResponse")

    def redirect_header(self, with_key: bool, extra: List[str]) -> List[str]:
        self.add_namespace("fastapi.responses.RedirectResponse")
        return self.signature(
            ["request: Request", *self.route_params(with_key), *extra],
            "RedirectResponse",
        )


class Index(WebMethod, ViewAbleMethod):
    """List page."""

    def generate_view_code(self) -> str:
        n: ResourceNames = self.names
        header: List[str] = self.view_header(with_key=False)
        body: List[str] = self.docstring(f"Render the list of {n.label.lower()} records.")
        body += self.parent_lookup()
        body += self.collection_lookup()
        body += self.template_response({n.collection_var: n.collection_var})
        return self.render(header, body)


class Show(WebMethod, ViewAbleMethod):
    """Detail page."""

    def generate_view_code(self) -> str:
        n: ResourceNames = self.names
        header: List[str] = self.view_header(with_key=True)
        body: List[str] = self.docstring(f"Render a single {n.label.lower()}.")
        body += self.parent_lookup()
        body += self.record_lookup()
        body += self.template_response({n.model_var: n.model_var})
        return self.render(header, body)


class Create(WebMethod, ViewAbleMethod):
    """Creation form."""

    def generate_view_code(self) -> str:
        n: ResourceNames = self.names
        header: List[str] = self.view_header(with_key=False)
        body: List[str] = self.docstring(f"Render the form to create a {n.label.lower()}.")
        body += self.parent_lookup()
        body += self.template_response({})
        return self.render(header, body)


class Edit(WebMethod, ViewAbleMethod):
    """Edit form."""

    def generate_view_code(self) -> str:
        n: ResourceNames = self.names
        header: List[str] = self.view_header(with_key=True)
        body: List[str] = self.docstring(f"Render the form to edit a {n.label.lower()}.")
        body += self.parent_lookup()
        body += self.record_lookup()
        body += self.template_response({n.model_var: n.model_var})
        return self.render(header, body)


class Store(WebMethod, RedirectAbleMethod):
    """Persist a new record, then redirect to it."""

    def generate_redirect_able_code(self) -> str:
        n: ResourceNames = self.names
        params, decode = self.request_input()
        header: List[str] = self.redirect_header(with_key=False, extra=params)
        body: List[str] = self.docstring(f"Create a {n.label.lower()} and redirect to it.")
        body += self.parent_lookup()
        body += decode
        body.append(f"{n.model_var} = {n.model_class}(**data)")
        if n.has_parent:
            body.append(f"{n.model_var}.{n.parent_key} = {n.parent_var}.id")
        body.append(f"db.add({n.model_var})")
        body += self.persist()
        body += self.redirect_to("show", with_key=True)
        return self.render(header, body)


class Update(WebMethod, RedirectAbleMethod):
    """Apply submitted changes, then redirect to the record."""

    def generate_redirect_able_code(self) -> str:
        n: ResourceNames = self.names
        params, decode = self.request_input()
        header: List[str] = self.redirect_header(with_key=True, extra=params)
        body: List[str] = self.docstring(f"Update a {n.label.lower()} and redirect to it.")
        body += self.parent_lookup()
        body += self.record_lookup()
        body += decode
        body.append("for field, value in data.items():")
        body.append(f"{self._indent}setattr({n.model_var}, field, value)")
        body += self.persist()
        body += self.redirect_to("show", with_key=True)
        return self.render(header, body)


class Destroy(WebMethod, RedirectAbleMethod):
    """Delete a record, then redirect to the list."""

    def generate_redirect_able_code(self) -> str:
        n: ResourceNames = self.names
        header: List[str] = self.redirect_header(with_key=True, extra=[])
        body: List[str] = self.docstring(f"Delete a {n.label.lower()} and redirect to the list.")
        body += self.parent_lookup()
        body += self.record_lookup()
        body.append(f"await db.delete({n.model_var})")
        body += self.persist(refresh=False)
        body += self.redirect_to("index", with_key=False)
        return self.render(header, body)
