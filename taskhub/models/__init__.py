"""
ORM models. Importing this package registers every table on `Base.metadata`.
"""

from taskhub.models.user import User
from taskhub.models.project import Project
from taskhub.models.task import Task

__all__ = ["User", "Project", "Task"]
