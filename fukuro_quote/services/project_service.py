"""
Project Service — dashboard operations on a project's links, deliverables,
review comments and approval state.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from fukuro_quote.models.enums import DeliverableType
from fukuro_quote.models.schemas import Deliverable, Project, ProjectLink, ReviewComment
from fukuro_quote.persistence.project_repository import ProjectStore

logger = logging.getLogger(__name__)

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def parse_timestamp(text: str) -> int:
    """Strict "M:SS" → seconds. Raises ValueError on anything else."""
    parts = text.strip().split(":")
    if len(parts) != 2 or not all(p.strip().isdigit() for p in parts):
        raise ValueError("Timestamp must use the M:SS format (e.g. 1:30)")
    minutes, seconds = int(parts[0]), int(parts[1])
    if seconds >= 60:
        raise ValueError("Seconds must be lower than 60")
    return minutes * 60 + seconds


def format_timestamp(seconds: float) -> str:
    """Seconds → "MM:SS"."""
    whole = int(seconds)
    return f"{whole // 60:02d}:{whole % 60:02d}"


def _validate_url(url: str) -> str:
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError as exc:
        raise ValueError(f"Invalid URL: {url!r}") from exc
    return url


class ProjectService:
    def __init__(self, store: ProjectStore):
        self.store = store

    def _deliverable(self, project: Project, index: int) -> Deliverable:
        if not 0 <= index < len(project.deliverables):
            raise IndexError(f"Deliverable {index} not found in project {project.id}")
        return project.deliverables[index]

    # ── Links ────────────────────────────────────────────

    def add_link(self, project_id: str, title: str, url: str) -> Project:
        title, url = title.strip(), url.strip()
        if not title or not url:
            raise ValueError("Both title and URL are required")
        project = self.store.get(project_id)
        project.links.append(ProjectLink(title=title, url=_validate_url(url)))
        logger.info(f"[{project_id}] Link added: {title}")
        return self.store.save(project)

    def delete_link(self, project_id: str, index: int) -> Project:
        project = self.store.get(project_id)
        if not 0 <= index < len(project.links):
            raise IndexError(f"Link {index} not found in project {project_id}")
        removed = project.links.pop(index)
        logger.info(f"[{project_id}] Link removed: {removed.title}")
        return self.store.save(project)

    # ── Deliverables ─────────────────────────────────────

    def add_deliverable(
        self,
        project_id: str,
        title: str,
        url: str,
        type: DeliverableType = DeliverableType.LINK,
        filename: Optional[str] = None,
        notes: str = "",
    ) -> Project:
        title = title.strip()
        if not title:
            raise ValueError("Deliverable title is required")
        if type == DeliverableType.LINK:
            url = _validate_url(url.strip())
        project = self.store.get(project_id)
        project.deliverables.append(
            Deliverable(title=title, type=type, url=url, filename=filename, notes=notes)
        )
        logger.info(f"[{project_id}] Deliverable added: {title}")
        return self.store.save(project)

    def toggle_approval(self, project_id: str, deliverable_index: int) -> Project:
        project = self.store.get(project_id)
        deliverable = self._deliverable(project, deliverable_index)
        deliverable.approved = not deliverable.approved
        logger.info(
            f"[{project_id}] {deliverable.title} "
            f"{'approved' if deliverable.approved else 'back to pending'}"
        )
        return self.store.save(project)

    # ── Review comments ──────────────────────────────────

    def add_comment(
        self,
        project_id: str,
        deliverable_index: int,
        timestamp: Union[str, float],
        comment: str,
    ) -> Project:
        """Pin a comment to a moment of the deliverable; comments stay sorted by time."""
        comment = comment.strip()
        if not comment:
            raise ValueError("Comment text is required")
        seconds = parse_timestamp(timestamp) if isinstance(timestamp, str) else float(timestamp)
        if seconds < 0:
            raise ValueError("Timestamp cannot be negative")

        project = self.store.get(project_id)
        deliverable = self._deliverable(project, deliverable_index)
        deliverable.comments.append(ReviewComment(timestamp=seconds, comment=comment))
        deliverable.comments.sort(key=lambda c: c.timestamp)
        logger.info(f"[{project_id}] Comment at {format_timestamp(seconds)} on {deliverable.title}")
        return self.store.save(project)

    def delete_comment(self, project_id: str, deliverable_index: int, comment_index: int) -> Project:
        project = self.store.get(project_id)
        deliverable = self._deliverable(project, deliverable_index)
        if not 0 <= comment_index < len(deliverable.comments):
            raise IndexError(f"Comment {comment_index} not found on {deliverable.title}")
        deliverable.comments.pop(comment_index)
        return self.store.save(project)

    # ── Bulk ─────────────────────────────────────────────

    def replace_assets(
        self,
        project_id: str,
        links: list[ProjectLink],
        deliverables: list[Deliverable],
    ) -> Project:
        """Overwrite links and deliverables wholesale (the dashboard's save)."""
        project = self.store.get(project_id)
        project.links = links
        project.deliverables = deliverables
        return self.store.save(project)
