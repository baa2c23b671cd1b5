from blog_api.db.models.post import BlogPost

__all__ = [
    "BlogPost",
]
