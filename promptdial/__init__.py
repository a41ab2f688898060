"""promptdial package: compile rough requests into structured prompts."""

from .compiler import CompileSession, PromptCompiler, compile_prompt
from .models import CompileInput, CompileOutput, PromptSpec

__all__ = [
    "CompileInput",
    "CompileOutput",
    "CompileSession",
    "PromptCompiler",
    "PromptSpec",
    "compile_prompt",
    "__version__",
]

__version__ = "0.1.0"
