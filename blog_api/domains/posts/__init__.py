from blog_api.domains.posts.entities import Author, BlogPost
from blog_api.domains.posts.exceptions import PostError, PostNotFoundError, PostValidationError
from blog_api.domains.posts.schemas import AuthorSchema, PostCreate, PostUpdate, PostResponse

__all__ = [
    "Author", "BlogPost",
    "PostError", "PostNotFoundError", "PostValidationError",
    "AuthorSchema", "PostCreate", "PostUpdate", "PostResponse"
]
