"""Upload flow: replace a branch, upload its package, refresh the index."""

from __future__ import annotations

import logging
from pathlib import Path

from docgateway.collaborators import BranchRegistry, DocumentStore, ProjectDirectory, SearchIndex
from docgateway.exceptions import ProjectNotFoundError
from docgateway.file_utils import remove_file_async
from docgateway.schemas import UploadResult

logger = logging.getLogger(__name__)


class BranchUploader:
    """Uploads a staged branch package and reports the outcome.

    Failures are logged and returned as ``UploadResult.failed``; the staged
    artifact is deleted whatever the outcome.
    """

    def __init__(
        self,
        branches: BranchRegistry,
        documents: DocumentStore,
        projects: ProjectDirectory,
        search: SearchIndex,
    ) -> None:
        self.branches = branches
        self.documents = documents
        self.projects = projects
        self.search = search

    async def upload_branch(self, project_id: str, branch_name: str, artifact: Path) -> UploadResult:
        """Replace ``branch_name`` with the package staged at ``artifact``.

        Args:
            project_id: Project identifier.
            branch_name: Branch to create or replace.
            artifact: Staged package file. Deleted before returning.

        Returns:
            UploadResult describing what was done, or why it failed.
        """
        branch_replaced = False
        try:
            logger.info("[Uploading] Getting branch information (%s/%s).", project_id, branch_name)
            existing = await self.branches.list(project_id)
            if any(branch.name == branch_name for branch in existing):
                logger.info("[Uploading] Deleting branch from storage (%s/%s).", project_id, branch_name)
                await self.branches.delete(project_id, branch_name)
                branch_replaced = True

            logger.info("[Uploading] Upload branch to storage (%s/%s).", project_id, branch_name)
            await self.documents.upload(project_id, branch_name, artifact)

            project = await self.projects.get(project_id)
            if project is None:
                raise ProjectNotFoundError(project_id)

            index_refreshed = False
            if not project.access_limited:
                logger.info("[Uploading] Ordering index refresh (%s/%s).", project_id, branch_name)
                await self.search.refresh(project_id, branch_name)
                index_refreshed = True
        except Exception as exc:
            logger.exception("[Uploading] Upload of %s/%s failed", project_id, branch_name)
            return UploadResult.failed(str(exc) or type(exc).__name__, branch_replaced=branch_replaced)
        finally:
            await self._discard(artifact)

        logger.info("[Uploading] Branch uploaded (%s/%s).", project_id, branch_name)
        return UploadResult.ok(branch_replaced=branch_replaced, index_refreshed=index_refreshed)

    async def _discard(self, artifact: Path) -> None:
        try:
            await remove_file_async(artifact)
        except OSError:
            logger.warning("[Uploading] Could not delete staged file %s", artifact, exc_info=True)
