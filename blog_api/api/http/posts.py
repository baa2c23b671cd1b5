from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from blog_api.core.db import get_db
from blog_api.domains.posts.exceptions import PostNotFoundError, PostValidationError
from blog_api.domains.posts.schemas import PostCreate, PostUpdate, PostResponse
from blog_api.domains.posts.services import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=List[PostResponse])
async def list_posts(db: AsyncSession = Depends(get_db)):
    """Получение списка всех постов"""
    post_service = PostService(db)
    posts = await post_service.list_posts()
    return [post.serialize() for post in posts]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Получение поста по идентификатору"""
    post_service = PostService(db)

    try:
        post = await post_service.get_post(post_id)
    except PostNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return post.serialize()


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(post_data: PostCreate, db: AsyncSession = Depends(get_db)):
    """Создание нового поста"""
    post_service = PostService(db)
    post = await post_service.create_post(post_data)
    return post.serialize()


@router.put("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_post(
    post_id: uuid.UUID,
    update_data: PostUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Обновление переданных полей поста"""
    post_service = PostService(db)

    try:
        await post_service.update_post(post_id, update_data)
    except PostValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except PostNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Удаление поста"""
    post_service = PostService(db)

    try:
        await post_service.delete_post(post_id)
    except PostNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)
