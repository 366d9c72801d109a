"""Test data factories using factory_boy.

These factories generate realistic test data for Conduit users, articles
and comments.
"""

from tests.factories.article import ArticleDraftFactory, CommentBodyFactory
from tests.factories.user import UserFactory

__all__ = [
    "ArticleDraftFactory",
    "CommentBodyFactory",
    "UserFactory",
]
