"""Structural contract and repair for prompt specs."""

from .schema import (
    ArtifactBlockModel,
    ArtifactModel,
    CompileInputModel,
    CompileOutputModel,
    PromptSpecModel,
    artifact_from_dict,
    artifact_to_dict,
    compile_output_to_dict,
    spec_from_dict,
    spec_to_dict,
    to_wire,
)
from .spec import REPAIR_FAILED_NOTE, ValidationResult, validate, validate_and_repair_spec

__all__ = [
    "ArtifactBlockModel",
    "ArtifactModel",
    "CompileInputModel",
    "CompileOutputModel",
    "PromptSpecModel",
    "REPAIR_FAILED_NOTE",
    "ValidationResult",
    "artifact_from_dict",
    "artifact_to_dict",
    "compile_output_to_dict",
    "spec_from_dict",
    "spec_to_dict",
    "to_wire",
    "validate",
    "validate_and_repair_spec",
]
