"""
Ownership Guard

One contract applied before every read or write of a per-user resource.
A resource owned by someone else produces exactly the same NotFound as a
resource that does not exist, and the log line for both is identical.

JobTargetGuard adds the second level: required skills are owned through
their parent job target, created only after the parent resolved for the
caller (in the same statement as the insert), and removed together with
it.
"""

from typing import List, Mapping

from loguru import logger

from careertrack.core.exceptions import NotFound, ValidationFailure
from careertrack.db.repositories import (
    JobTargetRepository, OwnedRepository, RequiredSkillRepository
)


class OwnershipGuard:

    def __init__(self, repository: OwnedRepository, kind: str):
        self.repository = repository
        self.kind = kind

    def _not_found(self, resource_id: str, caller_id: str) -> NotFound:
        logger.info("{} {} not found for {}", self.kind, resource_id, caller_id)
        return NotFound(f"{self.kind} not found")

    def scoped_find(self, resource_id: str, caller_id: str) -> dict:
        resource = self.repository.find(resource_id, caller_id)
        if resource is None:
            raise self._not_found(resource_id, caller_id)
        return resource

    def scoped_list(self, caller_id: str, limit: int = None) -> List[dict]:
        return self.repository.list(caller_id, limit=limit)

    def scoped_create(self, caller_id: str, payload: Mapping) -> dict:
        # owner_id in the payload, if any, is discarded by the repository
        resource = self.repository.create(caller_id, dict(payload))
        logger.info("Created {} {} for {}", self.kind, resource["id"], caller_id)
        return resource

    def scoped_update(self, resource_id: str, caller_id: str, patch: Mapping) -> dict:
        """Apply `patch` if every field in it is on the kind's allow-list."""
        rejected = sorted(set(patch) - set(self.repository.mutable_fields))
        if rejected:
            raise ValidationFailure(f"Fields not updatable on {self.kind}: {', '.join(rejected)}")

        resource = self.repository.update(resource_id, caller_id, dict(patch))
        if resource is None:
            raise self._not_found(resource_id, caller_id)
        logger.info("Updated {} {} ({})", self.kind, resource_id, ", ".join(patch) or "no changes")
        return resource

    def scoped_delete(self, resource_id: str, caller_id: str) -> None:
        if not self.repository.delete(resource_id, caller_id):
            raise self._not_found(resource_id, caller_id)
        logger.info("Deleted {} {}", self.kind, resource_id)


class JobTargetGuard(OwnershipGuard):

    def __init__(self, repository: JobTargetRepository, required_skills: RequiredSkillRepository):
        super().__init__(repository, "job")
        self.required_skills = required_skills

    def scoped_create_child(self, parent_id: str, caller_id: str, payload: Mapping) -> dict:
        """Create a required skill under a job target the caller owns."""
        # job_target_id in the payload, if any, is discarded by the repository
        child = self.required_skills.create(parent_id, caller_id, dict(payload))
        if child is None:
            raise self._not_found(parent_id, caller_id)
        logger.info("Created required skill {} on job {}", child["id"], parent_id)
        return child

    def scoped_find_child(self, child_id: str, caller_id: str) -> dict:
        child = self.required_skills.find(child_id, caller_id)
        if child is None:
            logger.info("required skill {} not found for {}", child_id, caller_id)
            raise NotFound("required skill not found")
        return child

    def scoped_list_children(self, parent_id: str, caller_id: str) -> List[dict]:
        parent = self.scoped_find(parent_id, caller_id)
        return self.required_skills.list_for_job(parent["id"])

    def scoped_delete_child(self, child_id: str, caller_id: str) -> None:
        child = self.scoped_find_child(child_id, caller_id)
        self.required_skills.delete(child["id"])
        logger.info("Deleted required skill {}", child["id"])
