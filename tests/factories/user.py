"""Factory for generating unique Conduit sign-up data."""

import factory
from faker import Faker

fake = Faker()


class UserFactory(factory.Factory):
    """Factory for registration payloads.

    Usernames and emails are unique per process so repeated live runs do not
    collide with accounts left behind by earlier runs.

    Usage:
        user = UserFactory()
        api.register(user["username"], user["email"], user["password"])

        # Fixed email
        user = UserFactory(email="someone@example.com")
    """

    class Meta:
        model = dict

    username = factory.Sequence(lambda n: f"{fake.user_name()[:12]}{n}{fake.random_int(100, 999)}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    password = factory.LazyFunction(lambda: fake.password(length=12, special_chars=False))
