"""Post Codec — JSON snapshot format shared by the cache and the HTTP layer.

Invariants:
    - encode_post(post) is decodable by decode_post() into an equal Post
    - decode_post() raises PostDecodeError for anything that is not a complete Post;
      it never returns a partially populated value
    - Snapshot keys: id, title, content, tags, created_at (ISO-8601)

Design Decisions:
    - pydantic TypeAdapter over hand-written json + isinstance checks: one place
      validates types, coerces timestamps and rejects missing fields
"""

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from app.core.post_types import Post

_POST_ADAPTER = TypeAdapter(Post)


class PostDecodeError(ValueError):
    """Raised when a stored snapshot cannot be turned back into a Post."""


def encode_post(post: Post) -> str:
    return _POST_ADAPTER.dump_json(post).decode("utf-8")


def decode_post(raw: str | bytes) -> Post:
    try:
        post = _POST_ADAPTER.validate_json(raw)
    except PydanticValidationError as e:
        raise PostDecodeError(f"invalid post snapshot: {e.error_count()} error(s)") from e
    if post.id <= 0:
        raise PostDecodeError("invalid post snapshot: id must be positive")
    if not post.title.strip() or not post.content.strip():
        raise PostDecodeError("invalid post snapshot: title and content must be non-empty")
    return post
