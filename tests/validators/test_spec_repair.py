"""Tests for spec validation with auto-repair."""

from __future__ import annotations

import asyncio
import copy

from promptdial.compiler import compile_prompt
from promptdial.models import CompileInput
from promptdial.validators import REPAIR_FAILED_NOTE, spec_to_dict, validate_and_repair_spec


def _broken_spec() -> dict:
    return {
        "rawInput": "Write a PRD",
        "templateId": "prd",
        "dial": "high",
        "tokenBudget": "lots",
        "systemInstruction": "Be precise.",
        "sections": [
            {"heading": "Problem Statement", "instruction": "Define it."},
            {"heading": "Requirements", "instruction": "List them.", "injected_blocks": []},
        ],
        "constraints": "none",
        "meta": {"totalTokens": -1},
    }


def test_valid_spec_is_returned_unrepaired(collaborators) -> None:
    resolve, fetch = collaborators
    output = asyncio.run(compile_prompt(CompileInput(raw_input="Write a PRD"), resolve, fetch))
    data = spec_to_dict(output.spec)

    result = validate_and_repair_spec(data)

    assert result.valid is True
    assert result.repaired is False
    assert result.data == data


def test_repair_fills_defaults() -> None:
    result = validate_and_repair_spec(_broken_spec())

    assert result.valid is True
    assert result.repaired is True
    data = result.data or {}
    assert data["id"]
    assert data["dial"] == 3
    assert data["tokenBudget"] == 0
    assert data["constraints"] == []
    assert data["artifactRefs"] == []
    assert data["meta"]["totalTokens"] == 0
    assert data["meta"]["lintScore"] == 0
    assert all(section["injectedBlocks"] == [] for section in data["sections"])


def test_repair_does_not_mutate_input() -> None:
    original = _broken_spec()
    snapshot = copy.deepcopy(original)

    validate_and_repair_spec(original)

    assert original == snapshot


def test_repair_is_idempotent() -> None:
    first = validate_and_repair_spec(_broken_spec())
    second = validate_and_repair_spec(first.data)

    assert second.valid is True
    assert second.repaired is False
    assert second.data == first.data


def test_repair_accepts_snake_case_keys() -> None:
    data = {
        "raw_input": "text",
        "template_id": "critique",
        "dial": 9,
        "system_instruction": "Be fair.",
        "sections": [{"heading": "Summary", "instruction": "Sum up."}],
    }

    result = validate_and_repair_spec(data)

    assert result.valid is True
    assert (result.data or {})["dial"] == 3


def test_unrepairable_spec_reports_errors() -> None:
    result = validate_and_repair_spec({"templateId": "poem", "sections": []})

    assert result.valid is False
    assert result.repaired is True
    assert result.errors
    assert result.errors[-1] == REPAIR_FAILED_NOTE


def test_non_mapping_input_is_not_repaired() -> None:
    result = validate_and_repair_spec(["not", "a", "spec"])

    assert result.valid is False
    assert result.repaired is False
    assert result.errors
