"""Template compiler strategies used to render component examples."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Mapping, Protocol, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

RenderFunction = Callable[[Mapping[str, Any]], str]
CompileResult = Union[str, RenderFunction]


class TemplateCompiler(Protocol):
    """Turns template source into markup or into a render function."""

    def __call__(self, source: str, source_path: Path) -> CompileResult:
        ...


class TemplateCompileError(RuntimeError):
    """Raised when an example template fails to compile or render."""

    def __init__(self, source_path: Path, message: str) -> None:
        self.source_path = source_path
        super().__init__(f'"{source_path}" {message}')


def render_template(
    compiler: TemplateCompiler,
    source: str,
    source_path: Path,
    context: Mapping[str, Any] | None = None,
) -> str:
    """Compile ``source`` and, when the compiler returns a callable, invoke it with ``context``."""
    try:
        compiled = compiler(source, source_path)
        markup = compiled(dict(context or {})) if callable(compiled) else compiled
    except Exception as exc:
        raise TemplateCompileError(source_path, str(exc)) from exc
    return str(markup)


class JinjaCompiler:
    """Compiles example templates with Jinja2.

    Templates are loaded relative to ``search_path`` so examples may include or
    extend shared partials from the component tree.
    """

    def __init__(self, search_path: Path | None = None, **env_options: Any) -> None:
        options: dict[str, Any] = {
            "autoescape": select_autoescape(["html", "xml"]),
            "trim_blocks": True,
            "lstrip_blocks": True,
        }
        options.update(env_options)
        loader = FileSystemLoader(str(search_path)) if search_path is not None else None
        self._env = Environment(loader=loader, **options)

    def __call__(self, source: str, source_path: Path) -> RenderFunction:
        template = self._env.from_string(source)
        return template.render


__all__ = [
    "CompileResult",
    "JinjaCompiler",
    "RenderFunction",
    "TemplateCompileError",
    "TemplateCompiler",
    "render_template",
]
