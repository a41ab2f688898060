"""Tests for latest-wins compile sessions."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

from promptdial.compiler import CompileSession
from promptdial.models import Artifact, ArtifactRef, CompileInput


def test_session_keeps_latest_output(collaborators) -> None:
    resolve, fetch = collaborators
    session = CompileSession(resolve, fetch)

    output = asyncio.run(session.submit(CompileInput(raw_input="Write a report")))

    assert output is not None
    assert session.latest is output
    assert session.current_request == 1


def test_session_discards_superseded_results() -> None:
    async def scenario() -> tuple[Optional[object], Optional[object], CompileSession]:
        gate = asyncio.Event()

        async def resolve(tokens: Sequence[str]) -> List[ArtifactRef]:
            if "slow" in tokens:
                await gate.wait()
            return [ArtifactRef(raw=token) for token in tokens]

        async def fetch(artifact_id: str) -> Optional[Artifact]:
            return None

        session = CompileSession(resolve, fetch)
        slow = asyncio.create_task(session.submit(CompileInput(raw_input="Report on @slow")))
        await asyncio.sleep(0)
        fast = await session.submit(CompileInput(raw_input="Report on @fast"))
        gate.set()
        stale = await slow
        return stale, fast, session

    stale, fast, session = asyncio.run(scenario())

    assert stale is None
    assert fast is not None
    assert session.latest is fast
    assert session.current_request == 2
