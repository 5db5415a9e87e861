"""
tests/test_generator.py
Integration tests for the generation orchestrator and the CLI.

Tests cover:
- Generating every registered method for flat and nested models
- Per-method failure isolation
- Report rendering (one de-duplicated import block) and summary
- Import-path loading of models
- CLI exit codes and output streams
"""

from __future__ import annotations

import ast
import logging
import sys
from pathlib import Path
from typing import Iterator, List

import pytest

from ctrlgen.cli import EXIT_GENERATION_ERROR, EXIT_INPUT_ERROR, EXIT_SUCCESS, cli_main
from ctrlgen.errors import ReflectionError
from ctrlgen.generator import ControllerGenerator, GenerationReport, load_object
from ctrlgen.methods import web

from conftest import BlogPost, Comment, FakeClassRegistry, Opaque, Post, is_valid_method


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _restore_ctrlgen_logger() -> Iterator[None]:
    """The CLI installs its own stderr handler; undo it after each test."""
    ctrlgen_logger: logging.Logger = logging.getLogger("ctrlgen")
    handlers = list(ctrlgen_logger.handlers)
    level: int = ctrlgen_logger.level
    propagate: bool = ctrlgen_logger.propagate
    yield
    ctrlgen_logger.handlers[:] = handlers
    ctrlgen_logger.setLevel(level)
    ctrlgen_logger.propagate = propagate


@pytest.fixture()
def generator(registry: FakeClassRegistry) -> ControllerGenerator:
    return ControllerGenerator(class_exists=registry)


@pytest.fixture()
def request_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """An importable package holding ``BlogPosts.StoreRequest``."""
    folder: Path = tmp_path / "shopapp" / "http" / "requests"
    folder.mkdir(parents=True)
    for pkg in (tmp_path / "shopapp", tmp_path / "shopapp" / "http", folder):
        (pkg / "__init__.py").write_text("", encoding="utf-8")
    (folder / "BlogPosts.py").write_text(
        "class StoreRequest:\n    pass\n", encoding="utf-8"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    yield "shopapp.http.requests"
    for name in list(sys.modules):
        if name == "shopapp" or name.startswith("shopapp."):
            del sys.modules[name]


def _run(argv: List[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        cli_main(argv)
    return exc_info.value.code


# ===========================================================================
# ControllerGenerator
# ===========================================================================


class TestGenerate:
    def test_all_web_methods(self, generator: ControllerGenerator) -> None:
        report: GenerationReport = generator.generate(BlogPost)
        assert report.success
        assert [m.method_name for m in report.methods] == [
            "index", "show", "create", "store", "edit", "update", "destroy",
        ]
        assert all(not m.is_api for m in report.methods)
        assert report.model == "BlogPost"
        assert report.parent is None

    def test_all_api_methods(self, generator: ControllerGenerator) -> None:
        report: GenerationReport = generator.generate(BlogPost, api=True)
        assert [m.method_name for m in report.methods] == [
            "index", "show", "store", "update", "destroy",
        ]
        assert all(m.is_api for m in report.methods)

    def test_selected_nested(self, generator: ControllerGenerator) -> None:
        report: GenerationReport = generator.generate(Comment, ["store"], parent=Post)
        assert report.parent == "Post"
        assert "comment.post_id = post.id" in report.methods[0].code

    def test_unknown_method_recorded(self, generator: ControllerGenerator) -> None:
        report: GenerationReport = generator.generate(BlogPost, ["index", "publish", "show"])
        assert not report.success
        assert [m.method_name for m in report.methods] == ["index", "show"]
        assert report.failures[0].method_name == "publish"
        assert report.failures[0].error_type == "UnknownMethodError"

    def test_unintrospectable_model_recorded(self, generator: ControllerGenerator) -> None:
        report: GenerationReport = generator.generate(Opaque, ["index", "show"])
        assert report.methods == []
        assert {f.error_type for f in report.failures} == {"ReflectionError"}
        assert len(report.failures) == 2

    def test_descriptor_recorded(self, generator: ControllerGenerator) -> None:
        result = generator.generate_method(generator.build_method("store", BlogPost))
        assert result.descriptor == "ctrlgen.methods.web.Store"

    def test_elapsed_time_recorded(self, generator: ControllerGenerator) -> None:
        result = generator.generate_method(generator.build_method("index", BlogPost))
        assert isinstance(result.elapsed_seconds, float)
        assert result.elapsed_seconds > 0.0
        report: GenerationReport = generator.generate(BlogPost, ["index"])
        assert "ms" in report.summary()

    def test_build_method_overrides(self, generator: ControllerGenerator) -> None:
        method = generator.build_method("store", Comment, parent=Post, method_name="save")
        assert isinstance(method, web.Store)
        assert method.get_method_name() == "save"
        assert method.parent_model is Post

    def test_uses_oracle(self) -> None:
        registry = FakeClassRegistry({"app.http.requests.BlogPosts.StoreRequest"})
        report = ControllerGenerator(class_exists=registry).generate(BlogPost, ["store"])
        assert "payload: StoreRequest," in report.methods[0].code


class TestReport:
    def test_namespaces_keep_duplicates(self, generator: ControllerGenerator) -> None:
        report: GenerationReport = generator.generate(BlogPost)
        assert report.namespaces.count("fastapi.Depends") == 7

    def test_import_block_deduplicates(self, generator: ControllerGenerator) -> None:
        report: GenerationReport = generator.generate(BlogPost)
        block: str = report.import_block()
        assert block.count("from fastapi import ") == 1
        assert "from fastapi import Depends, HTTPException, Request" in block
        assert "from fastapi.responses import HTMLResponse, RedirectResponse" in block
        assert "from app.templating import templates" in block
        ast.parse(block)

    def test_render(self, generator: ControllerGenerator) -> None:
        report: GenerationReport = generator.generate(BlogPost, api=True)
        rendered: str = report.render()
        assert rendered.startswith(report.import_block())
        assert rendered.endswith("\n")
        assert is_valid_method("\n\n".join(m.code for m in report.methods))

    def test_summary(self, generator: ControllerGenerator) -> None:
        report: GenerationReport = generator.generate(Comment, ["show", "nope"], parent=Post)
        summary: str = report.summary()
        assert "FAILED" in summary
        assert "Parent:     Post" in summary
        assert "nope: UnknownMethodError" in summary


# ===========================================================================
# load_object
# ===========================================================================


class TestLoadObject:
    def test_colon_form(self) -> None:
        assert load_object("conftest:BlogPost") is BlogPost

    def test_dotted_form(self) -> None:
        assert load_object("conftest.Comment") is Comment

    def test_nested_attribute(self) -> None:
        assert load_object("os:path.join") is __import__("os").path.join

    @pytest.mark.parametrize(
        "path", ["nomodule_ctrlgen_xyz:Thing", "conftest:Missing", "BlogPost"]
    )
    def test_errors(self, path: str) -> None:
        with pytest.raises(ReflectionError):
            load_object(path)


# ===========================================================================
# CLI
# ===========================================================================


class TestCli:
    def test_web_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["-m", "conftest:BlogPost"]) == EXIT_SUCCESS
        out: str = capsys.readouterr().out
        assert "    async def index(" in out
        assert "    async def destroy(" in out
        assert "from conftest import BlogPost" in out

    def test_api_selected(self, capsys: pytest.CaptureFixture[str]) -> None:
        code: int = _run(["-m", "conftest:Comment", "-p", "conftest:Post", "--api",
                          "--methods", "index,store"])
        assert code == EXIT_SUCCESS
        out: str = capsys.readouterr().out
        assert ") -> List[CommentResource]:" in out
        assert "async def show(" not in out
        assert "post_id: int," in out

    def test_method_name(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["-m", "conftest:BlogPost", "--methods", "store", "-n", "save"]) == EXIT_SUCCESS
        assert "    async def save(" in capsys.readouterr().out

    def test_method_name_needs_single_method(self) -> None:
        assert _run(["-m", "conftest:BlogPost", "-n", "save"]) == EXIT_INPUT_ERROR
        assert _run(["-m", "conftest:BlogPost", "--methods", "store,update",
                     "-n", "save"]) == EXIT_INPUT_ERROR

    def test_bad_model_path(self) -> None:
        assert _run(["-m", "conftest:Missing"]) == EXIT_INPUT_ERROR

    def test_missing_config(self, tmp_path: Path) -> None:
        code: int = _run(["-m", "conftest:BlogPost", "-c", str(tmp_path / "none.yaml")])
        assert code == EXIT_INPUT_ERROR

    def test_unknown_method_is_generation_error(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(["-m", "conftest:BlogPost", "--methods", "index,publish"]) == (
            EXIT_GENERATION_ERROR
        )
        assert "async def index(" in capsys.readouterr().out

    def test_unknown_renamed_method_is_input_error(self) -> None:
        assert _run(["-m", "conftest:BlogPost", "--methods", "publish", "-n", "x"]) == (
            EXIT_INPUT_ERROR
        )

    def test_unintrospectable_model(self) -> None:
        assert _run(["-m", "conftest:Opaque", "--methods", "show", "-n", "view"]) == (
            EXIT_GENERATION_ERROR
        )
        assert _run(["-m", "conftest:Opaque"]) == EXIT_GENERATION_ERROR

    def test_summary_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        _run(["-m", "conftest:BlogPost", "--methods", "show", "--summary"])
        captured = capsys.readouterr()
        assert "Generation Report" in captured.err
        assert "Generation Report" not in captured.out

    def test_custom_request_from_config(
        self,
        request_package: str,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        config_path: Path = tmp_path / "ctrlgen.yaml"
        config_path.write_text(
            f"ctrlgen:\n  request:\n    namespace: {request_package}\n",
            encoding="utf-8",
        )
        code: int = _run(["-m", "conftest:BlogPost", "--methods", "store,update",
                          "-c", str(config_path)])
        assert code == EXIT_SUCCESS
        out: str = capsys.readouterr().out
        assert "from shopapp.http.requests.BlogPosts import StoreRequest" in out
        assert "payload: StoreRequest," in out
        assert "data = dict(await request.form())" in out
