"""Template compilation for component examples."""

from .compilers import (
    CompileResult,
    JinjaCompiler,
    RenderFunction,
    TemplateCompileError,
    TemplateCompiler,
    render_template,
)

__all__ = [
    "CompileResult",
    "JinjaCompiler",
    "RenderFunction",
    "TemplateCompileError",
    "TemplateCompiler",
    "render_template",
]
