from blog_api.api.http.health import router as health_router
from blog_api.api.http.posts import router as posts_router

__all__ = [
    "health_router",
    "posts_router"
]
