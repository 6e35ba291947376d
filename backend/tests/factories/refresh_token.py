"""Factory Boy definition for :class:`blogauth.models.refresh_token.RefreshToken`."""

from __future__ import annotations

import factory
from blogauth.models.refresh_token import RefreshToken

from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class RefreshTokenFactory(BaseFactory):
    class Meta:
        model = RefreshToken

    id = None
    user_id = factory.LazyFunction(lambda: UserFactory().id)
    refresh_token = factory.Sequence(lambda n: f"header.payload-{n}.signature")
