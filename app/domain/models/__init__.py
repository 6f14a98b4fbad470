from app.domain.models.developer import Developer
from app.domain.models.project import Project, ProjectStatus
from app.domain.models.task import Task, TaskStatus

__all__ = ["Developer", "Project", "ProjectStatus", "Task", "TaskStatus"]
