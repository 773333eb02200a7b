"""
Project Store — projects and their dashboard assets, keyed by id and
looked up by name without regard to case.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fukuro_quote.models.schemas import Project
from fukuro_quote.persistence.json_store import JsonFileStore

logger = logging.getLogger(__name__)


class ProjectNotFoundError(LookupError):
    pass


class ProjectStore:
    def __init__(self, data_dir: Path | str):
        self._file = JsonFileStore(Path(data_dir) / "projects.json")

    def list_projects(self) -> list[Project]:
        return [Project.model_validate(r) for r in self._file.read()]

    def get(self, project_id: str) -> Project:
        for project in self.list_projects():
            if project.id == project_id:
                return project
        raise ProjectNotFoundError(f"Project {project_id} not found")

    def get_by_name(self, name: str) -> Optional[Project]:
        wanted = name.strip().lower()
        return next(
            (p for p in self.list_projects() if p.name.strip().lower() == wanted),
            None,
        )

    def save(self, project: Project) -> Project:
        """Insert or replace a project by id, stamping updated_at."""
        project.updated_at = datetime.now(timezone.utc)
        projects = self.list_projects()
        for i, existing in enumerate(projects):
            if existing.id == project.id:
                projects[i] = project
                break
        else:
            projects.append(project)
        self._file.write([p.model_dump(mode="json") for p in projects])
        return project

    def upsert(self, name: str) -> Project:
        """Create the project, or refresh it if the name already exists."""
        project = self.get_by_name(name)
        if project is None:
            project = Project(name=name.strip())
            logger.info(f"[STORE] Created project {project.name!r} ({project.id})")
        return self.save(project)

    def record_quote(self, name: str) -> Project:
        """Bump the quote count, creating the project on its first quote."""
        project = self.get_by_name(name) or Project(name=name.strip())
        project.quote_count += 1
        return self.save(project)
