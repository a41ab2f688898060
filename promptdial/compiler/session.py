"""Latest-wins bookkeeping for callers that recompile as input changes."""

from __future__ import annotations

import itertools
from typing import Optional

from ..artifacts.resolver import FetchFn, ResolveFn
from ..models import CompileInput, CompileOutput
from .pipeline import PromptCompiler


class CompileSession:
    """Tags each submission with an increasing request id.

    When compilations overlap, only the output of the most recent submission
    is kept; ``submit`` returns ``None`` for a superseded request.
    """

    def __init__(
        self,
        resolve_artifacts: ResolveFn,
        fetch_artifact: FetchFn,
        compiler: PromptCompiler | None = None,
    ) -> None:
        self._resolve = resolve_artifacts
        self._fetch = fetch_artifact
        self._compiler = compiler or PromptCompiler()
        self._counter = itertools.count(1)
        self._current = 0
        self.latest: Optional[CompileOutput] = None

    @property
    def current_request(self) -> int:
        return self._current

    async def submit(self, compile_input: CompileInput) -> Optional[CompileOutput]:
        request_id = next(self._counter)
        self._current = request_id
        output = await self._compiler.compile(compile_input, self._resolve, self._fetch)
        if request_id != self._current:
            self._compiler.logger.debug("Discarding stale compilation %d", request_id)
            return None
        self.latest = output
        return output


__all__ = ["CompileSession"]
