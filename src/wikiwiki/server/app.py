from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from wikiwiki import __version__
from wikiwiki.errors import NotFoundError
from wikiwiki.graph import GraphBuilder
from wikiwiki.language import LanguageContext, default_context
from wikiwiki.models import Entity
from wikiwiki.resolution import EntityResolver


class LanguageIn(BaseModel):
    code: str


def create_app(
    resolver: EntityResolver | None = None,
    builder: GraphBuilder | None = None,
    language: LanguageContext | None = None,
) -> FastAPI:
    language = language or default_context
    resolver = resolver or EntityResolver(language)
    builder = builder or GraphBuilder(resolver.wikidata, language)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        try:
            yield
        finally:
            await resolver.aclose()

    app = FastAPI(title="WikiWiki - Entity Explorer", version=__version__, lifespan=lifespan)

    @app.get("/health")
    async def health():
        return {"ok": True}

    @app.get("/language")
    async def get_language():
        return {"code": language.get()}

    @app.put("/language")
    async def put_language(payload: LanguageIn):
        try:
            language.set(payload.code)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return {"code": language.get()}

    @app.get("/resolve")
    async def resolve(q: str = Query(..., min_length=1)):
        if not q.strip():
            raise HTTPException(status_code=422, detail="empty query")
        try:
            result = await resolver.resolve(q)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return result.model_dump(by_alias=True)

    @app.get("/entity/{canonical_id}")
    async def entity(canonical_id: str, title: str | None = None):
        result = await resolver.resolve_from_candidate(title or canonical_id, canonical_id)
        return result.model_dump(by_alias=True)

    @app.get("/graph/{canonical_id}")
    async def graph(
        canonical_id: str,
        title: str | None = None,
        depth: int = Query(1, ge=0, le=3),
        max_nodes: int = Query(20, ge=1, le=100),
    ):
        center: Entity = await resolver.resolve_from_candidate(title or canonical_id, canonical_id)
        built = await builder.build_graph(center, depth=depth, max_nodes_per_level=max_nodes)
        return {"entity": center.model_dump(by_alias=True), "graph": built.to_dict()}

    return app
