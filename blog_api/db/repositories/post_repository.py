from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
import uuid

from blog_api.db.models.post import BlogPost as BlogPostModel
from blog_api.domains.posts.entities import Author, BlogPost


class PostRepository:
    """Репозиторий для работы с постами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self) -> List[BlogPost]:
        """Все посты, без пагинации и фильтров"""
        result = await self.session.execute(
            select(BlogPostModel).order_by(BlogPostModel.created.asc())
        )
        return [self._to_domain(db_post) for db_post in result.scalars().all()]

    async def create(self, post: BlogPost) -> BlogPost:
        """Создание поста"""
        created = await self.create_many([post])
        return created[0]

    async def create_many(self, posts: Iterable[BlogPost]) -> List[BlogPost]:
        """Массовая вставка постов"""
        db_posts = [
            BlogPostModel(
                title=post.title,
                author=post.author.to_document(),
                content=post.content
            )
            for post in posts
        ]

        self.session.add_all(db_posts)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        for db_post in db_posts:
            await self.session.refresh(db_post)
        return [self._to_domain(db_post) for db_post in db_posts]

    async def get_by_id(self, post_id: uuid.UUID) -> Optional[BlogPost]:
        """Получение поста по идентификатору"""
        db_post = await self._get_model(post_id)
        return self._to_domain(db_post) if db_post else None

    async def find_one(self) -> Optional[BlogPost]:
        result = await self.session.execute(select(BlogPostModel).limit(1))
        db_post = result.scalar_one_or_none()
        return self._to_domain(db_post) if db_post else None

    async def update_by_id(self, post_id: uuid.UUID, fields: Dict[str, Any]) -> Optional[BlogPost]:
        """Частичное обновление; None, если пост не найден"""
        db_post = await self._get_model(post_id)
        if db_post is None:
            return None

        post = self._to_domain(db_post)
        post.apply_update(fields)

        db_post.title = post.title
        db_post.content = post.content
        db_post.author = post.author.to_document()

        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(db_post)
        return self._to_domain(db_post)

    async def delete_by_id(self, post_id: uuid.UUID) -> bool:
        """Удаление поста"""
        stmt = delete(BlogPostModel).where(BlogPostModel.id == post_id)
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return result.rowcount > 0

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(BlogPostModel.id)))
        return result.scalar()

    async def _get_model(self, post_id: uuid.UUID) -> Optional[BlogPostModel]:
        result = await self.session.execute(
            select(BlogPostModel).where(BlogPostModel.id == post_id)
        )
        return result.scalar_one_or_none()

    def _to_domain(self, db_post: BlogPostModel) -> BlogPost:
        """Преобразование модели БД в доменную сущность"""
        return BlogPost(
            id=db_post.id,
            title=db_post.title,
            author=Author.from_document(db_post.author),
            content=db_post.content,
            created=db_post.created
        )
