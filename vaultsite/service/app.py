"""FastAPI application entrypoint for vaultsite service mode."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError, VaultSiteConfig, load_config
from ..errors import VaultSiteError
from ..git.publisher import Publisher
from ..pipeline import SiteBuilder
from ..render import SiteRenderer
from ..store.filesystem import FileSystemContentStore
from ..writer import SiteWriter


class BuildRequest(BaseModel):
    path: str
    site_id: Optional[str] = None


class BuildResponse(BaseModel):
    site: Dict[str, Any]


class ExportRequest(BaseModel):
    path: str
    site_id: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    repo: Optional[str] = None
    output_path: Optional[str] = None
    publish: bool = False


class ExportResponse(BaseModel):
    status: str
    path: str
    files: List[str]
    published: bool = False


class HealthResponse(BaseModel):
    status: str


def _default_builder(config: VaultSiteConfig) -> SiteBuilder:
    store = FileSystemContentStore(config.root, config.exclude_paths)
    renderer = SiteRenderer(branch=config.publish.branch or "main")
    return SiteBuilder(store, writer=SiteWriter(store, renderer), publisher=Publisher())


def _load_vault_config(path: str) -> VaultSiteConfig:
    vault = Path(path).expanduser()
    if not vault.is_dir():
        raise FileNotFoundError(f"Vault not found: {vault}")
    return load_config(vault)


def create_app(
    builder_factory: Callable[[VaultSiteConfig], SiteBuilder] = _default_builder,
) -> FastAPI:
    """Create the FastAPI application exposing vaultsite operations."""

    app = FastAPI(title="vaultsite Service", version="1.0.0")

    def get_builder_factory() -> Callable[[VaultSiteConfig], SiteBuilder]:
        return builder_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/build", response_model=BuildResponse)
    async def build_site(
        payload: BuildRequest,
        factory: Callable[[VaultSiteConfig], SiteBuilder] = Depends(get_builder_factory),
    ) -> BuildResponse:
        config = _load_vault_config(payload.path)
        builder = factory(config)
        site = await builder.build(config.site_config(site_id=payload.site_id))
        return BuildResponse(site=site.to_dict())

    @app.post("/export", response_model=ExportResponse)
    async def export_site(
        payload: ExportRequest,
        factory: Callable[[VaultSiteConfig], SiteBuilder] = Depends(get_builder_factory),
    ) -> ExportResponse:
        config = _load_vault_config(payload.path)
        builder = factory(config)
        site_config = config.site_config(
            site_id=payload.site_id,
            title=payload.title,
            url=payload.url,
            repo=payload.repo,
            path=payload.output_path,
        )
        publish = config.publish
        if payload.publish:
            publish.enabled = True
        outcome = await builder.export(site_config, publish)
        return ExportResponse(
            status="ok",
            path=outcome.site.path,
            files=outcome.files,
            published=outcome.published,
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(VaultSiteError)
    async def site_error_handler(_: Any, exc: VaultSiteError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "0.0.0.0", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
