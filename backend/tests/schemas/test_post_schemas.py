"""Post Schemas — verifies absent/present handling for partial updates.

Tests:
    - Only fields present in the body reach the PostPatch
    - Explicit null is rejected; explicit [] survives as a value
    - Text fields are stripped and must stay non-empty
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.core.post_types import UNSET
from app.schemas.post import PostCreate, PostUpdate


def test_absent_fields_stay_unset():
    patch = PostUpdate.model_validate({"content": "C"}).to_patch()
    assert patch.content == "C"
    assert patch.title is UNSET
    assert patch.tags is UNSET


def test_empty_body_builds_empty_patch():
    assert PostUpdate.model_validate({}).to_patch().is_empty


def test_explicit_empty_tags_is_kept():
    patch = PostUpdate.model_validate({"tags": []}).to_patch()
    assert patch.values() == {"tags": []}


@pytest.mark.parametrize("body", [
    {"title": None},
    {"content": None},
    {"tags": None},
])
def test_explicit_null_is_rejected(body):
    with pytest.raises(PydanticValidationError):
        PostUpdate.model_validate(body)


def test_update_strips_text():
    assert PostUpdate.model_validate({"title": "  T  "}).title == "T"


def test_create_strips_and_defaults_tags():
    body = PostCreate.model_validate({"title": " A ", "content": "B"})
    assert body.title == "A"
    assert body.tags == []


def test_create_rejects_whitespace_content():
    with pytest.raises(PydanticValidationError):
        PostCreate.model_validate({"title": "A", "content": "  "})
