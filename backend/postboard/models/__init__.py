"""
ORM models for the Postboard schema.

Importing this package registers every table on `Base.metadata`, which is
what Alembic autogenerate and the test fixtures rely on.
"""

from postboard.models.post import Post, post_tags
from postboard.models.profile import Profile
from postboard.models.tag import Tag
from postboard.models.user import User

__all__ = ["Post", "Profile", "Tag", "User", "post_tags"]
