# docman_sdk/schemas/records.py
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RecordSchema(BaseModel):
    """
    Базовая схема чтения записи сервиса. Сервис отдает идентификатор как `_id`,
    неизвестные поля сохраняются как есть.
    """

    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )
    updated_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("updatedAt", "updated_at")
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    @property
    def display_title(self) -> str:
        return str(getattr(self, "title", None) or getattr(self, "name", None) or self.id)


class DocumentRecord(RecordSchema):
    title: str
    description: Optional[str] = None
    review_date: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("reviewDate", "review_date")
    )


class ProjectRecord(RecordSchema):
    name: str
    status: Optional[str] = None
    priority: Optional[str] = None


class BookRecord(RecordSchema):
    title: str
    description: Optional[str] = None


class CategoryRecord(RecordSchema):
    name: str
    description: Optional[str] = None
