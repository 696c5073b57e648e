"""
Job categories (e.g. "Teacher", "Nanny") that every job is filed under.
"""

from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, ConflictError, NotFoundError, service_operation
from app.core.responses import ServiceResponse, success_response
from app.models import Job, JobCategory
from app.schemas.common import serialize, serialize_many
from app.schemas.job import JobCategoryCreate, JobCategoryOut, JobCategoryUpdate

NAME_TAKEN = "Job category with this name already exists"
IN_USE = "Cannot delete job category as it is referenced by other records"


class JobCategoryService:
    def __init__(self, db: Session):
        self.db = db

    def _get_category(self, category_id: int) -> JobCategory:
        category = self.db.query(JobCategory).filter(JobCategory.id == category_id).first()
        if not category:
            raise NotFoundError("Job category not found")
        return category

    def _ensure_name_available(self, name: str, exclude_id: int = None) -> None:
        query = self.db.query(JobCategory.id).filter(JobCategory.name == name)
        if exclude_id is not None:
            query = query.filter(JobCategory.id != exclude_id)
        if query.first():
            raise ConflictError(NAME_TAKEN)

    @service_operation("create", "Failed to create job category", conflict_message=NAME_TAKEN)
    def create(self, data: JobCategoryCreate) -> ServiceResponse:
        self._ensure_name_available(data.name)

        category = JobCategory(name=data.name, description=data.description)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return success_response(
            "Job category created successfully", serialize(JobCategoryOut, category), 201
        )

    @service_operation("find all", "Failed to retrieve job categories")
    def find_all(self) -> ServiceResponse:
        categories = self.db.query(JobCategory).order_by(JobCategory.name.asc()).all()
        return success_response(
            "Job categories retrieved successfully", serialize_many(JobCategoryOut, categories)
        )

    @service_operation("find one", "Failed to retrieve job category")
    def find_one(self, category_id: int) -> ServiceResponse:
        category = self._get_category(category_id)
        return success_response("Job category retrieved successfully", serialize(JobCategoryOut, category))

    @service_operation("update", "Failed to update job category", conflict_message=NAME_TAKEN)
    def update(self, category_id: int, data: JobCategoryUpdate) -> ServiceResponse:
        category = self._get_category(category_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("name"):
            self._ensure_name_available(changes["name"], exclude_id=category_id)
        elif "name" in changes:
            changes.pop("name")

        for field, value in changes.items():
            setattr(category, field, value)

        self.db.commit()
        self.db.refresh(category)
        return success_response("Job category updated successfully", serialize(JobCategoryOut, category))

    @service_operation("remove", "Failed to delete job category", reference_message=IN_USE)
    def remove(self, category_id: int) -> ServiceResponse:
        category = self._get_category(category_id)
        if self.db.query(Job.id).filter(Job.category_id == category_id).first():
            raise BadRequestError(IN_USE)

        self.db.delete(category)
        self.db.commit()
        return success_response("Job category deleted successfully")
