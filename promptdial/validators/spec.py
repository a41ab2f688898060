"""Schema validation with a single best-effort repair pass for specs."""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Mapping, MutableMapping, Optional, Type, TypeVar

import pydantic

from ..logging import get_logger
from ..models import DEFAULT_DIAL, MAX_DIAL, MIN_DIAL, utc_timestamp
from .schema import CompilationMetaModel, PromptSpecModel, wire_key

T = TypeVar("T")

REPAIR_FAILED_NOTE = "Auto-repair was attempted but validation still failed."

logger = get_logger("validators")


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of validating one value.

    ``data`` holds the normalised wire-shape payload when ``valid`` is true;
    ``errors`` holds ``path: message`` strings otherwise.
    """

    valid: bool
    data: Optional[T] = None
    errors: Optional[List[str]] = None
    repaired: bool = False


def validate(model: Type[pydantic.BaseModel], data: Any) -> ValidationResult[Dict[str, Any]]:
    """Validate ``data`` against ``model`` without raising."""
    try:
        parsed = model.model_validate(data)
    except pydantic.ValidationError as exc:
        return ValidationResult(valid=False, errors=[_format_error(error) for error in exc.errors()])
    return ValidationResult(valid=True, data=parsed.model_dump(by_alias=True))


def validate_and_repair_spec(data: Any) -> ValidationResult[Dict[str, Any]]:
    """Validate spec-shaped data, applying default fills once if it is invalid.

    The caller's object is never mutated. Repairs are idempotent: repairing
    already repaired data validates directly and returns the same payload.
    """
    direct = validate(PromptSpecModel, data)
    if direct.valid:
        return direct

    if not isinstance(data, Mapping):
        return ValidationResult(valid=False, errors=direct.errors, repaired=False)

    logger.debug("Spec failed validation with %d error(s); attempting repair", len(direct.errors or []))
    candidate: Dict[str, Any] = {
        wire_key(key): value for key, value in copy.deepcopy(dict(data)).items()
    }
    did_repair = _apply_repairs(candidate)

    after = validate(PromptSpecModel, candidate)
    if after.valid:
        return ValidationResult(valid=True, data=after.data, repaired=did_repair)

    errors = list(after.errors or [])
    if did_repair:
        errors.append(REPAIR_FAILED_NOTE)
    logger.info("Spec repair did not produce a valid spec (%d error(s))", len(after.errors or []))
    return ValidationResult(valid=False, errors=errors, repaired=did_repair)


def zeroed_meta() -> Dict[str, Any]:
    return {
        "totalTokens": 0,
        "compileDurationMs": 0,
        "compiledAt": utc_timestamp(),
        "lintScore": 0,
    }


def _apply_repairs(candidate: MutableMapping[str, Any]) -> bool:
    repaired = False

    if not candidate.get("id"):
        candidate["id"] = str(uuid.uuid4())
        repaired = True

    dial = candidate.get("dial")
    if not _is_number(dial) or not MIN_DIAL <= dial <= MAX_DIAL:
        candidate["dial"] = DEFAULT_DIAL
        repaired = True

    if not _is_number(candidate.get("tokenBudget")):
        candidate["tokenBudget"] = 0
        repaired = True

    for key in ("constraints", "artifactRefs"):
        if not isinstance(candidate.get(key), (list, tuple)):
            candidate[key] = []
            repaired = True

    meta = candidate.get("meta")
    if not isinstance(meta, Mapping) or not validate(CompilationMetaModel, meta).valid:
        candidate["meta"] = zeroed_meta()
        repaired = True

    sections = candidate.get("sections")
    if isinstance(sections, (list, tuple)):
        for section in sections:
            if not isinstance(section, MutableMapping):
                continue
            if "injected_blocks" in section:
                section["injectedBlocks"] = section.pop("injected_blocks")
            if not isinstance(section.get("injectedBlocks"), (list, tuple)):
                section["injectedBlocks"] = []
                repaired = True

    return repaired


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_error(error: Mapping[str, Any]) -> str:
    path = ".".join(str(part) for part in error.get("loc", ()))
    return f"{path}: {error.get('msg', 'invalid value')}"


__all__ = [
    "REPAIR_FAILED_NOTE",
    "ValidationResult",
    "validate",
    "validate_and_repair_spec",
    "zeroed_meta",
]
