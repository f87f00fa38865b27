from datetime import datetime
from enum import Enum
from uuid import uuid4

from peewee import (
    Model,
    CharField,
    DateField,
    DateTimeField,
    DecimalField,
    ForeignKeyField,
    IntegerField,
    TextField,
)

from database.db import db


def _new_id() -> str:
    return uuid4().hex


class BaseModel(Model):
    id = CharField(primary_key=True, default=_new_id)

    class Meta:
        database = db


class UserRole(str, Enum):
    MANAGER = "manager"
    EMPLOYEE = "employee"
    CLIENT = "client"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class ProjectPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StageStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class CommentTaskStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class User(BaseModel):
    name = CharField()
    email = CharField(unique=True)
    role = CharField(index=True)
    password_hash = CharField()
    created_at = DateTimeField(default=datetime.now)

    def __str__(self) -> str:
        return self.name


class Project(BaseModel):
    title = CharField(index=True)
    description = TextField(default="")
    client = ForeignKeyField(User, backref="client_projects", null=True)
    # Имя клиента на момент назначения, не синхронизируется при переименовании
    client_name = CharField(default="")
    deadline = DateField()
    priority = CharField(default=ProjectPriority.MEDIUM.value)
    status = CharField(default=ProjectStatus.ACTIVE.value)
    progress_percentage = IntegerField(default=0)
    created_at = DateTimeField(default=datetime.now)
    updated_at = DateTimeField(default=datetime.now)

    def __str__(self) -> str:
        return self.title


class ProjectEmployee(BaseModel):
    project = ForeignKeyField(Project, backref="employee_links", on_delete="CASCADE")
    employee = ForeignKeyField(User, backref="project_links")
    # порядок назначения сохраняется
    position = IntegerField(default=0)

    class Meta:
        indexes = ((("project", "employee"), True),)


class Stage(BaseModel):
    project = ForeignKeyField(Project, backref="stages", on_delete="CASCADE")
    name = CharField()
    position = IntegerField(default=0)
    status = CharField(default=StageStatus.PENDING.value)


class CommentTask(BaseModel):
    project = ForeignKeyField(Project, backref="comment_tasks", on_delete="CASCADE")
    title = CharField()
    status = CharField(default=CommentTaskStatus.OPEN.value)
    created_at = DateTimeField(default=datetime.now)


class Lead(BaseModel):
    name = CharField()
    contact_info = CharField(default="")
    estimated_amount = DecimalField(max_digits=12, decimal_places=2, default=0)
    notes = TextField(default="")
    created_at = DateTimeField(default=datetime.now)

    def __str__(self) -> str:
        return self.name
