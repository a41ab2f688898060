"""Prompt compilation pipeline."""

from .intent import ParsedIntent, extract_constraints, parse_intent
from .pipeline import PromptCompiler, compile_prompt
from .renderer import render_prompt
from .selector import BlockSelection, section_tags, select_blocks
from .session import CompileSession
from .spec_generator import generate_spec

__all__ = [
    "BlockSelection",
    "CompileSession",
    "ParsedIntent",
    "PromptCompiler",
    "compile_prompt",
    "extract_constraints",
    "generate_spec",
    "parse_intent",
    "render_prompt",
    "section_tags",
    "select_blocks",
]
