from blog_api.db.repositories.post_repository import PostRepository

__all__ = [
    "PostRepository",
]
