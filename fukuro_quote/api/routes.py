"""
API routes — thin HTTP layer over the quote and project services.

Routes:
  GET    /health                                   → API health check
  POST   /api/quotes/estimate                      → Price a request (nothing saved)
  POST   /api/quotes                               → Price and submit a quote
  GET    /api/quotes                               → All submitted quotes (dashboard)
  GET    /api/projects                             → List projects
  GET    /api/projects/{name}                      → One project, by name or id
  POST   /api/projects                             → Create or refresh a project
  PUT    /api/projects/{project_id}                → Replace links + deliverables (dashboard)
  GET    /api/projects/{project_id}/quotes         → Quotes of one project
  POST   /api/projects/{project_id}/links          → Add a reference link (dashboard)
  DELETE /api/projects/{project_id}/links/{i}      → Remove a link (dashboard)
  POST   /api/projects/{project_id}/deliverables   → Add a deliverable (dashboard)
  POST   .../deliverables/{i}/comments             → Timestamped review comment (dashboard)
  DELETE .../deliverables/{i}/comments/{j}         → Remove a comment (dashboard)
  POST   .../deliverables/{i}/approval             → Toggle approval (dashboard)
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from fukuro_quote.api.dependencies import (
    get_project_service,
    get_project_store,
    get_quote_service,
    get_quote_store,
    require_dashboard_token,
)
from fukuro_quote.models.enums import DeliverableType
from fukuro_quote.models.schemas import (
    Deliverable,
    Project,
    ProjectLink,
    QuoteBreakdown,
    QuoteRequest,
    StoredQuote,
)
from fukuro_quote.persistence.json_store import StorageError
from fukuro_quote.persistence.project_repository import ProjectNotFoundError, ProjectStore
from fukuro_quote.persistence.quote_repository import QuoteStore
from fukuro_quote.services.project_service import ProjectService
from fukuro_quote.services.quote_service import QuoteService

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
quote_router = APIRouter()
project_router = APIRouter()

_dashboard = [Depends(require_dashboard_token)]


# ── Request / response schemas ───────────────────────────
class QuoteResponse(BaseModel):
    breakdown: QuoteBreakdown
    receipt: str


class SubmittedQuoteResponse(BaseModel):
    quote: StoredQuote
    receipt: str


class ProjectCreateRequest(BaseModel):
    name: str


class ProjectAssetsRequest(BaseModel):
    links: list[ProjectLink] = []
    deliverables: list[Deliverable] = []


class LinkRequest(BaseModel):
    title: str
    url: str


class DeliverableRequest(BaseModel):
    title: str
    url: str = ""
    type: DeliverableType = DeliverableType.LINK
    filename: Optional[str] = None
    notes: str = ""


class CommentRequest(BaseModel):
    timestamp: Union[str, float]  # "M:SS" or seconds
    comment: str


def _call(fn: Callable[..., T], *args, **kwargs) -> T:
    """Run a service call, translating domain errors to HTTP errors."""
    try:
        return fn(*args, **kwargs)
    except (ProjectNotFoundError, IndexError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StorageError as e:
        logger.error(f"Storage failure: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Quotes ───────────────────────────────────────────────

@quote_router.post("/estimate", response_model=QuoteResponse)
def estimate_quote(request: QuoteRequest, service: QuoteService = Depends(get_quote_service)):
    breakdown = service.estimate(request)
    return QuoteResponse(breakdown=breakdown, receipt=service.receipt(request, breakdown))


@quote_router.post("", response_model=SubmittedQuoteResponse)
def submit_quote(request: QuoteRequest, service: QuoteService = Depends(get_quote_service)):
    try:
        stored = service.submit(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        logger.error(f"Error submitting quote: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return SubmittedQuoteResponse(
        quote=stored,
        receipt=service.receipt(stored.request, stored.breakdown),
    )


@quote_router.get("", response_model=list[StoredQuote], dependencies=_dashboard)
def list_quotes(quotes: QuoteStore = Depends(get_quote_store)):
    return quotes.list_quotes()


# ── Projects ─────────────────────────────────────────────

@project_router.get("", response_model=list[Project])
def list_projects(projects: ProjectStore = Depends(get_project_store)):
    return projects.list_projects()


@project_router.get("/{name}", response_model=Project)
def get_project(name: str, projects: ProjectStore = Depends(get_project_store)):
    project = projects.get_by_name(name)
    if project is None:
        project = _call(projects.get, name)
    return project


@project_router.post("", response_model=Project)
def create_project(body: ProjectCreateRequest, projects: ProjectStore = Depends(get_project_store)):
    if not body.name.strip():
        raise HTTPException(status_code=400, detail="Project name is required")
    return _call(projects.upsert, body.name)


@project_router.put("/{project_id}", response_model=Project, dependencies=_dashboard)
def replace_project_assets(
    project_id: str,
    body: ProjectAssetsRequest,
    service: ProjectService = Depends(get_project_service),
):
    return _call(service.replace_assets, project_id, body.links, body.deliverables)


@project_router.get("/{project_id}/quotes", response_model=list[StoredQuote])
def list_project_quotes(
    project_id: str,
    projects: ProjectStore = Depends(get_project_store),
    quotes: QuoteStore = Depends(get_quote_store),
):
    project = _call(projects.get, project_id)
    return quotes.list_for_project(project.name)


@project_router.post("/{project_id}/links", response_model=Project, dependencies=_dashboard)
def add_link(project_id: str, body: LinkRequest, service: ProjectService = Depends(get_project_service)):
    return _call(service.add_link, project_id, body.title, body.url)


@project_router.delete("/{project_id}/links/{index}", response_model=Project, dependencies=_dashboard)
def delete_link(project_id: str, index: int, service: ProjectService = Depends(get_project_service)):
    return _call(service.delete_link, project_id, index)


@project_router.post("/{project_id}/deliverables", response_model=Project, dependencies=_dashboard)
def add_deliverable(
    project_id: str,
    body: DeliverableRequest,
    service: ProjectService = Depends(get_project_service),
):
    return _call(
        service.add_deliverable,
        project_id,
        body.title,
        body.url,
        type=body.type,
        filename=body.filename,
        notes=body.notes,
    )


@project_router.post(
    "/{project_id}/deliverables/{index}/comments",
    response_model=Project,
    dependencies=_dashboard,
)
def add_comment(
    project_id: str,
    index: int,
    body: CommentRequest,
    service: ProjectService = Depends(get_project_service),
):
    return _call(service.add_comment, project_id, index, body.timestamp, body.comment)


@project_router.delete(
    "/{project_id}/deliverables/{index}/comments/{comment_index}",
    response_model=Project,
    dependencies=_dashboard,
)
def delete_comment(
    project_id: str,
    index: int,
    comment_index: int,
    service: ProjectService = Depends(get_project_service),
):
    return _call(service.delete_comment, project_id, index, comment_index)


@project_router.post(
    "/{project_id}/deliverables/{index}/approval",
    response_model=Project,
    dependencies=_dashboard,
)
def toggle_approval(project_id: str, index: int, service: ProjectService = Depends(get_project_service)):
    return _call(service.toggle_approval, project_id, index)
