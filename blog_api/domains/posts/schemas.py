from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
import uuid
from datetime import datetime


class AuthorSchema(BaseModel):
    """Автор в теле запроса"""
    first_name: str = Field(..., alias="firstName", max_length=100)
    last_name: str = Field(..., alias="lastName", max_length=100)

    model_config = ConfigDict(populate_by_name=True)


class PostCreate(BaseModel):
    """Схема для создания поста"""
    title: str = Field(..., max_length=255)
    author: AuthorSchema
    content: str


class PostUpdate(BaseModel):
    """Схема для частичного обновления поста"""
    id: Optional[uuid.UUID] = None
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    author: Optional[AuthorSchema] = None


class PostResponse(BaseModel):
    """Схема ответа: автор в виде строки "First Last" """
    id: uuid.UUID
    title: str
    author: str
    content: str
    created: Optional[datetime] = None
