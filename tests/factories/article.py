"""Factories for article drafts and comment text."""

import factory
from faker import Faker

from conduit_e2e.api.models import ArticleDraft

fake = Faker()


class ArticleDraftFactory(factory.Factory):
    """Factory for ArticleDraft model.

    Usage:
        # Random article with two tags
        draft = ArticleDraftFactory()

        # Fixed tags, order preserved
        draft = ArticleDraftFactory(tag_list=["api", "testing", "cypress"])

        # Body exercising every markdown construct the reader checks
        draft = ArticleDraftFactory(markdown=True)
    """

    class Meta:
        model = ArticleDraft

    title = factory.Sequence(lambda n: f"{fake.sentence(nb_words=4).rstrip('.')} {n}")
    description = factory.LazyFunction(lambda: fake.sentence(nb_words=8))
    body = factory.LazyFunction(lambda: fake.paragraph(nb_sentences=3))
    tag_list = factory.LazyFunction(
        lambda: fake.words(nb=2, unique=True, ext_word_list=["python", "testing", "dragons", "api"])
    )

    class Params:
        """Factory traits for common scenarios."""

        markdown = factory.Trait(
            body=(
                "# Heading\n\nSome **bold** and *italic* text.\n\n"
                "- first item\n- second item"
            )
        )
        untagged = factory.Trait(tag_list=factory.LazyFunction(list))


class CommentBodyFactory(factory.Factory):
    """Comment text as typed into the comment box."""

    class Meta:
        model = dict

    body = factory.LazyFunction(lambda: fake.sentence(nb_words=10))
