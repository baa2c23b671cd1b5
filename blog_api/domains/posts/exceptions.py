import uuid


class PostError(Exception):
    """Базовая ошибка домена постов"""


class PostNotFoundError(PostError):
    def __init__(self, post_id: uuid.UUID):
        self.post_id = post_id
        super().__init__(f"Post {post_id} not found")


class PostValidationError(PostError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
