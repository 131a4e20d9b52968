"""Tests for template compilers."""

from __future__ import annotations

from pathlib import Path

import pytest

from patternsync.rendering import JinjaCompiler, TemplateCompileError, render_template


def test_render_template_invokes_render_function_with_context(tmp_path: Path) -> None:
    received = {}

    def compiler(source: str, source_path: Path):
        def render(context):
            received.update(context)
            return source.replace("NAME", context["name"])

        return render

    markup = render_template(compiler, "<b>NAME</b>", tmp_path / "a.hbs", {"name": "button"})

    assert markup == "<b>button</b>"
    assert received == {"name": "button"}


def test_render_template_accepts_precompiled_markup(tmp_path: Path) -> None:
    markup = render_template(lambda source, path: source.upper(), "<i>x</i>", tmp_path / "a.hbs")

    assert markup == "<I>X</I>"


def test_render_template_wraps_render_failures(tmp_path: Path) -> None:
    def compiler(source: str, source_path: Path):
        def render(context):
            raise KeyError("missing")

        return render

    source_path = tmp_path / "atoms" / "button" / "_example" / "example.hbs"
    with pytest.raises(TemplateCompileError) as excinfo:
        render_template(compiler, "x", source_path)

    assert str(excinfo.value) == f"\"{source_path}\" 'missing'"
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_jinja_compiler_renders_with_context(tmp_path: Path) -> None:
    compiler = JinjaCompiler()

    render = compiler("<p>{{ name }} is {{ stability }}</p>", tmp_path / "example.html")

    assert render({"name": "radio", "stability": "beta"}) == "<p>radio is beta</p>"


def test_jinja_compiler_includes_shared_partials(tmp_path: Path) -> None:
    (tmp_path / "partials").mkdir()
    (tmp_path / "partials" / "label.html").write_text("<label>{{ name }}</label>", encoding="utf-8")
    compiler = JinjaCompiler(search_path=tmp_path)

    markup = render_template(
        compiler,
        '<div>{% include "partials/label.html" %}</div>',
        tmp_path / "example.html",
        {"name": "Check"},
    )

    assert markup == "<div><label>Check</label></div>"


def test_jinja_syntax_errors_surface_as_compile_errors(tmp_path: Path) -> None:
    source_path = tmp_path / "broken.html"

    with pytest.raises(TemplateCompileError) as excinfo:
        render_template(JinjaCompiler(), "{% if %}", source_path)

    assert str(excinfo.value).startswith(f'"{source_path}" ')
