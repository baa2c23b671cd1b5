"""
Unit tests for the blog post entity and request schemas.
"""

import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from blog_api.domains.posts.entities import Author, BlogPost
from blog_api.domains.posts.schemas import PostCreate, PostUpdate


class TestAuthor:
    def test_full_name(self):
        assert Author("Jane", "Doe").full_name == "Jane Doe"

    def test_full_name_without_last_name(self):
        assert Author("Jane", "").full_name == "Jane"

    def test_document_roundtrip_keys(self):
        author = Author.from_document({"firstName": "Jane", "lastName": "Doe"})
        assert author.to_document() == {"firstName": "Jane", "lastName": "Doe"}


class TestBlogPost:
    def _post(self):
        return BlogPost(
            id=uuid.UUID("12345678-1234-5678-1234-567812345678"),
            title="Hello",
            author=Author("Jane", "Doe"),
            content="Body",
            created=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

    def test_serialize_flattens_author(self):
        assert self._post().serialize() == {
            "id": "12345678-1234-5678-1234-567812345678",
            "title": "Hello",
            "author": "Jane Doe",
            "content": "Body",
            "created": "2024-01-01T00:00:00+00:00",
        }

    def test_apply_update_changes_only_given_fields(self):
        post = self._post()
        post.apply_update({"title": "Updated Name"})

        assert post.title == "Updated Name"
        assert post.content == "Body"
        assert post.author == Author("Jane", "Doe")

    def test_apply_update_accepts_author_document(self):
        post = self._post()
        post.apply_update({"author": {"firstName": "Ada", "lastName": "Lovelace"}})
        assert post.author.full_name == "Ada Lovelace"

    def test_new_post_has_no_id(self):
        post = BlogPost.create_post("t", Author("a", "b"), "c")
        assert post.id is None
        assert post.serialize()["id"] is None


class TestSchemas:
    def test_create_uses_camel_case_author(self):
        data = PostCreate(title="t", content="c", author={"firstName": "Jane", "lastName": "Doe"})
        assert data.author.first_name == "Jane"
        assert data.author.last_name == "Doe"

    def test_create_requires_author(self):
        with pytest.raises(ValidationError):
            PostCreate(title="t", content="c")

    def test_update_tracks_sent_fields(self):
        data = PostUpdate(title="Updated Name")
        assert data.model_fields_set == {"title"}
        assert data.id is None
