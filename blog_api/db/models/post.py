from sqlalchemy import Column, String, Text, JSON

from blog_api.db.base import BaseModel


class BlogPost(BaseModel):
    __tablename__ = "blog_posts"

    title = Column(String(255), nullable=False)
    # {"firstName": ..., "lastName": ...}
    author = Column(JSON, nullable=False)
    content = Column(Text, nullable=False)
