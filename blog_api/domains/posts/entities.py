import uuid
from datetime import datetime
from typing import Any, Dict, Optional


class Author:
    """Автор поста"""

    def __init__(self, first_name: str, last_name: str):
        self.first_name = first_name
        self.last_name = last_name

    @property
    def full_name(self) -> str:
        """Имя для отображения: "First Last" """
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def to_document(self) -> Dict[str, str]:
        return {"firstName": self.first_name, "lastName": self.last_name}

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "Author":
        data = data or {}
        return cls(first_name=data.get("firstName", ""), last_name=data.get("lastName", ""))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Author):
            return False
        return (self.first_name, self.last_name) == (other.first_name, other.last_name)

    def __repr__(self) -> str:
        return f"Author(first_name={self.first_name}, last_name={self.last_name})"


class BlogPost:
    """Сущность поста блога"""

    def __init__(
        self,
        title: str,
        author: Author,
        content: str,
        id: Optional[uuid.UUID] = None,
        created: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.author = author
        self.content = content
        self.created = created

    def apply_update(self, fields: Dict[str, Any]) -> None:
        """Частичное обновление: меняются только переданные поля"""
        if "title" in fields:
            self.title = fields["title"]
        if "content" in fields:
            self.content = fields["content"]
        if "author" in fields:
            author = fields["author"]
            self.author = author if isinstance(author, Author) else Author.from_document(author)

    def serialize(self) -> Dict[str, Any]:
        """Представление для HTTP-клиентов, автор сворачивается в строку"""
        return {
            "id": str(self.id) if self.id is not None else None,
            "title": self.title,
            "author": self.author.full_name,
            "content": self.content,
            "created": self.created.isoformat() if self.created else None,
        }

    @classmethod
    def create_post(cls, title: str, author: Author, content: str) -> "BlogPost":
        """Создание нового поста (идентификатор назначает хранилище)"""
        return cls(title=title, author=author, content=content)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BlogPost):
            return False
        return self.id is not None and self.id == other.id

    def __repr__(self) -> str:
        return f"BlogPost(id={self.id}, title={self.title})"
