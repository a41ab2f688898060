"""FastAPI application exposing compilation and artifact management."""

from __future__ import annotations

from typing import Annotated, Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Body, Depends, FastAPI, Response
from fastapi.responses import JSONResponse
from pydantic import Field

from ..artifacts import (
    ArtifactNotFoundError,
    ArtifactStore,
    ArtifactStoreError,
    create_artifact,
    create_block,
    open_store,
    store_collaborators,
)
from ..compiler import PromptCompiler
from ..config import CompilerConfig, PromptDialConfig
from ..logging import get_logger
from ..models import MAX_DIAL, MIN_DIAL, ArtifactBlock, CompileInput
from ..templates import UnknownTemplateError
from ..validators import (
    ArtifactModel,
    CompileOutputModel,
    artifact_to_dict,
    compile_output_to_dict,
    validate_and_repair_spec,
)
from ..validators.schema import ArtifactRefModel, WireModel, to_wire

logger = get_logger("service")


class CompileRequest(WireModel):
    raw_input: Annotated[str, Field(min_length=1)]
    dial: Optional[Annotated[int, Field(ge=MIN_DIAL, le=MAX_DIAL)]] = None
    token_budget: Optional[Annotated[int, Field(ge=0)]] = None
    template_override: Optional[str] = None
    force_artifacts: List[str] = Field(default_factory=list)


class ValidateResponse(WireModel):
    valid: bool
    data: Optional[Dict[str, Any]] = None
    errors: Optional[List[str]] = None
    repaired: bool = False


class BlockPayload(WireModel):
    id: Optional[str] = None
    label: Annotated[str, Field(min_length=1)]
    content: str
    tags: List[str] = Field(default_factory=list)
    priority: Annotated[int, Field(ge=0, le=100)] = 50
    do_not_send: bool = False

    def to_block(self) -> ArtifactBlock:
        block = create_block(
            self.label,
            self.content,
            self.tags,
            self.priority,
            do_not_send=self.do_not_send,
        )
        if self.id:
            block.id = self.id
        return block


class ArtifactCreateRequest(WireModel):
    name: Annotated[str, Field(min_length=1)]
    description: str = ""
    aliases: Optional[List[str]] = None
    blocks: List[BlockPayload] = Field(default_factory=list)


class ArtifactUpdateRequest(WireModel):
    name: Optional[Annotated[str, Field(min_length=1)]] = None
    description: Optional[str] = None
    aliases: Optional[List[str]] = None
    blocks: Optional[List[BlockPayload]] = None


class ResolveRequest(WireModel):
    refs: List[str]


class HealthResponse(WireModel):
    status: str
    artifacts: int


def create_app(
    store_factory: Callable[[], ArtifactStore] = open_store,
    *,
    compiler: PromptCompiler | None = None,
    defaults: CompilerConfig | None = None,
) -> FastAPI:
    """Create the application; ``store_factory`` is called once and shared by all requests."""
    app = FastAPI(title="PromptDial Service", version="1.0.0")
    store = store_factory()
    prompt_compiler = compiler or PromptCompiler()
    compile_defaults = defaults or CompilerConfig()

    async def get_store() -> ArtifactStore:
        return store

    @app.get("/health", response_model=HealthResponse)
    async def health(artifacts: ArtifactStore = Depends(get_store)) -> HealthResponse:
        return HealthResponse(status="ok", artifacts=artifacts.count())

    @app.post("/compile", response_model=CompileOutputModel)
    async def compile_endpoint(
        payload: CompileRequest,
        artifacts: ArtifactStore = Depends(get_store),
    ) -> Dict[str, Any]:
        compile_input = CompileInput(
            raw_input=payload.raw_input,
            dial=compile_defaults.dial if payload.dial is None else payload.dial,
            token_budget=(
                compile_defaults.token_budget if payload.token_budget is None else payload.token_budget
            ),
            template_override=payload.template_override or compile_defaults.template,
            force_artifacts=tuple(payload.force_artifacts),
        )
        resolve, fetch = store_collaborators(artifacts)
        output = await prompt_compiler.compile(compile_input, resolve, fetch)
        return compile_output_to_dict(output)

    @app.post("/validate", response_model=ValidateResponse)
    async def validate_endpoint(payload: Any = Body(...)) -> ValidateResponse:
        result = validate_and_repair_spec(payload)
        return ValidateResponse(
            valid=result.valid,
            data=result.data,
            errors=result.errors,
            repaired=result.repaired,
        )

    @app.get("/artifacts", response_model=List[ArtifactModel])
    async def list_artifacts(artifacts: ArtifactStore = Depends(get_store)) -> List[Dict[str, Any]]:
        return [artifact_to_dict(artifact) for artifact in artifacts.list_all()]

    @app.post("/artifacts", response_model=ArtifactModel, status_code=201)
    async def create_artifact_endpoint(
        payload: ArtifactCreateRequest,
        artifacts: ArtifactStore = Depends(get_store),
    ) -> Dict[str, Any]:
        artifact = create_artifact(payload.name, payload.description)
        if payload.aliases is not None:
            artifact.aliases = list(payload.aliases)
        artifact.blocks = [block.to_block() for block in payload.blocks]
        artifact_id = artifacts.create(artifact)
        logger.info("Created artifact %s via service", artifact_id)
        return artifact_to_dict(artifacts.get(artifact_id))

    @app.post("/artifacts/resolve", response_model=List[ArtifactRefModel])
    async def resolve_endpoint(
        payload: ResolveRequest,
        artifacts: ArtifactStore = Depends(get_store),
    ) -> List[Any]:
        resolve, _ = store_collaborators(artifacts)
        return to_wire(await resolve(payload.refs))

    @app.get("/artifacts/{artifact_id}", response_model=ArtifactModel)
    async def get_artifact(
        artifact_id: str,
        artifacts: ArtifactStore = Depends(get_store),
    ) -> Dict[str, Any]:
        artifact = artifacts.get(artifact_id)
        if artifact is None:
            raise ArtifactNotFoundError(artifact_id)
        return artifact_to_dict(artifact)

    @app.put("/artifacts/{artifact_id}", response_model=ArtifactModel)
    async def update_artifact(
        artifact_id: str,
        payload: ArtifactUpdateRequest,
        artifacts: ArtifactStore = Depends(get_store),
    ) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        for name in ("name", "description", "aliases"):
            value = getattr(payload, name)
            if value is not None:
                changes[name] = value
        if payload.blocks is not None:
            changes["blocks"] = [block.to_block() for block in payload.blocks]
        return artifact_to_dict(artifacts.update(artifact_id, **changes))

    @app.delete("/artifacts/{artifact_id}", status_code=204)
    async def delete_artifact(
        artifact_id: str,
        artifacts: ArtifactStore = Depends(get_store),
    ) -> Response:
        if not artifacts.delete(artifact_id):
            raise ArtifactNotFoundError(artifact_id)
        return Response(status_code=204)

    @app.exception_handler(UnknownTemplateError)
    async def unknown_template_handler(_: Any, exc: UnknownTemplateError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ArtifactNotFoundError)
    async def not_found_handler(_: Any, exc: ArtifactNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ArtifactStoreError)
    async def store_error_handler(_: Any, exc: ArtifactStoreError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    return app


def run_service(config: PromptDialConfig | None = None) -> None:  # pragma: no cover - integration path
    host = config.service.host if config else "127.0.0.1"
    port = config.service.port if config else 8000
    store_path = config.store.path if config else None
    seed = config.store.seed if config else True
    defaults = config.compiler if config else None

    app = create_app(lambda: open_store(store_path, seed=seed), defaults=defaults)
    logger.info("Starting service on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
