from datetime import date

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from studio_scheduler.db.models.staff import StaffRole

DEFAULT_CONSTRAINTS = "No specific constraints."


def default_avatar(name: str) -> str:
    return f"https://picsum.photos/seed/{name}/200"


class StaffBase(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    role: StaffRole = StaffRole.HOST
    constraints: str = DEFAULT_CONSTRAINTS
    avatar: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("constraints")
    @classmethod
    def default_blank_constraints(cls, value: str) -> str:
        return value.strip() or DEFAULT_CONSTRAINTS


class StaffCreate(StaffBase):
    def to_record(self) -> dict:
        data = self.model_dump()
        data["avatar"] = self.avatar or default_avatar(self.name)
        return data


class StaffRead(BaseModel):
    id: str
    name: str
    role: StaffRole
    constraints: str
    avatar: str

    model_config = ConfigDict(from_attributes=True)


class StaffUpdate(BaseModel):
    """Partial update; fields left out keep their value, ``null`` resets the defaults."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    role: StaffRole | None = None
    constraints: str | None = None
    avatar: str | None = None

    @field_validator("name", "role")
    @classmethod
    def reject_null(cls, value, info: ValidationInfo):
        if value is None:
            raise ValueError(f"{info.field_name} must not be null")
        return value

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("constraints")
    @classmethod
    def default_blank_constraints(cls, value: str | None) -> str:
        if value is None:
            return DEFAULT_CONSTRAINTS
        return value.strip() or DEFAULT_CONSTRAINTS

    def to_changes(self, current_name: str) -> dict:
        data = self.model_dump(exclude_unset=True)
        if "avatar" in data and not data["avatar"]:
            data["avatar"] = default_avatar(data.get("name", current_name))
        return data


class ShiftRead(BaseModel):
    id: str
    date: date
    start_time: str
    end_time: str
    role: StaffRole
    assigned_staff_id: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ShiftRangeRequest(BaseModel):
    start_date: date
    end_date: date
