"""Unit tests for model mapping details."""

from sqlalchemy import inspect

from finboss.models.user import User


class TestUserMapping:
    def test_refresh_tokens_never_lazy_loaded(self):
        relationship = inspect(User).relationships["refresh_tokens"]

        assert relationship.lazy == "raise"
        assert relationship.passive_deletes == "all"
