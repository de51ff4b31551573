import math
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime, time, timedelta
from typing import Optional, List, Union
from uuid import UUID, uuid4

DEFAULT_DURATION = timedelta(days=7)

def _as_moment(when: Union[date, datetime], reference: datetime) -> datetime:
    """Turn a day or timestamp into a datetime comparable with `reference`."""
    if isinstance(when, datetime):
        moment = when
    else:
        moment = datetime.combine(when, time.min)

    if reference.tzinfo is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=reference.tzinfo)
    if reference.tzinfo is None and moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment

class Project(BaseModel):
    """A single tracked project with scheduling and budget metadata.

    Records are immutable values; the store replaces a record to change it.
    Field names are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: UUID = Field(default_factory=uuid4, description="Unique identifier, generated at creation")
    title: str = Field(description="Title of the project")
    description: str = Field(default="", description="What the project is about")
    start_date: datetime = Field(description="When the project starts")
    end_date: datetime = Field(description="When the project ends")
    location: str = Field(default="", description="Where the work happens")
    budget: float = Field(default=0.0, allow_inf_nan=False, description="Budget in dollars; finite, may be negative")
    is_completed: bool = Field(default=False, description="Whether the project is finished")

    def occurs_on(self, when: Union[date, datetime]) -> bool:
        """True when `when` is on the start day, the end day, or strictly between them.

        A plain date counts as midnight of that day for the between check.
        """
        day = when.date() if isinstance(when, datetime) else when
        if day == self.start_date.date() or day == self.end_date.date():
            return True
        moment = _as_moment(when, self.start_date)
        return self.start_date < moment < _as_moment(self.end_date, self.start_date)

    def matches(self, text: str) -> bool:
        """Case-insensitive substring match against title and description."""
        needle = text.casefold()
        return needle in self.title.casefold() or needle in self.description.casefold()

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

PROJECT_LIST = TypeAdapter(List[Project])

class ProjectForm(BaseModel):
    """Input collected by the create screen, validated before it reaches the store."""

    title: str = Field(description="Project title; required")
    description: str = Field(description="Project description; required")
    location: str = Field(description="Project location; required")
    budget: str = Field(description="Budget as typed; unparseable text counts as 0")
    start_date: datetime = Field(default_factory=datetime.now)
    end_date: Optional[datetime] = Field(default=None, description="Defaults to a week after start_date")

    @field_validator('title', 'description', 'location', 'budget')
    @classmethod
    def require_text(cls, v, info):
        if not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @model_validator(mode='after')
    def validate_dates(self):
        if self.end_date is None:
            self.end_date = self.start_date + DEFAULT_DURATION
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def parsed_budget(self) -> float:
        try:
            value = float(self.budget.strip())
        except ValueError:
            return 0.0
        return value if math.isfinite(value) else 0.0

    def to_project(self) -> Project:
        return Project(
            title=self.title,
            description=self.description,
            start_date=self.start_date,
            end_date=self.end_date,
            location=self.location,
            budget=self.parsed_budget(),
        )

def demo_projects(now: Optional[datetime] = None) -> List[Project]:
    """The sample projects shown on a fresh install."""
    now = now or datetime.now()
    return [
        Project(title="Website Redesign", description="Redesign company website",
                start_date=now, end_date=now + timedelta(days=30),
                location="Remote", budget=5000),
        Project(title="Mobile App Development", description="Create iOS app for client",
                start_date=now, end_date=now + timedelta(days=60),
                location="Office", budget=15000),
    ]
