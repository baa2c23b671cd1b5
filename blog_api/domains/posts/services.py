import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from blog_api.db.repositories.post_repository import PostRepository
from blog_api.domains.posts.entities import Author, BlogPost
from blog_api.domains.posts.exceptions import PostNotFoundError, PostValidationError
from blog_api.domains.posts.schemas import PostCreate, PostUpdate

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "content", "author")


class PostService:
    """Сервис для работы с постами"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.post_repository = PostRepository(session)

    async def list_posts(self) -> List[BlogPost]:
        return await self.post_repository.list()

    async def get_post(self, post_id: uuid.UUID) -> BlogPost:
        """Получение поста; PostNotFoundError, если его нет"""
        post = await self.post_repository.get_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    async def create_post(self, post_data: PostCreate) -> BlogPost:
        """Создание нового поста"""
        post = BlogPost.create_post(
            title=post_data.title,
            author=Author(
                first_name=post_data.author.first_name,
                last_name=post_data.author.last_name
            ),
            content=post_data.content
        )
        created_post = await self.post_repository.create(post)
        logger.info(f"Created post {created_post.id}")
        return created_post

    async def update_post(self, post_id: uuid.UUID, update_data: PostUpdate) -> BlogPost:
        """Частичное обновление поста"""
        if update_data.id is not None and update_data.id != post_id:
            raise PostValidationError(
                f"Request path id ({post_id}) and request body id ({update_data.id}) must match"
            )

        fields = {}
        for field in UPDATABLE_FIELDS:
            if field not in update_data.model_fields_set:
                continue
            value = getattr(update_data, field)
            if value is None:
                raise PostValidationError(f"`{field}` must not be null")
            if field == "author":
                value = Author(first_name=value.first_name, last_name=value.last_name)
            fields[field] = value

        post = await self.post_repository.update_by_id(post_id, fields)
        if post is None:
            raise PostNotFoundError(post_id)

        logger.info(f"Updated post {post_id}: {', '.join(fields) or 'no fields'}")
        return post

    async def delete_post(self, post_id: uuid.UUID) -> None:
        """Удаление поста"""
        deleted = await self.post_repository.delete_by_id(post_id)
        if not deleted:
            raise PostNotFoundError(post_id)
        logger.info(f"Deleted post {post_id}")
