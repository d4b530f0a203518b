import random

import factory
from django.contrib.auth import get_user_model
from factory import Faker, post_generation
from factory.django import DjangoModelFactory

from .models import Ad

SUB_CATEGORIES = {
    Ad.Category.HOME: ["furniture", "appliances", "kitchen"],
    Ad.Category.CARS: ["sedan", "suv", "spare-parts"],
    Ad.Category.REALESTATE: ["apartment", "land", "shop"],
    Ad.Category.SERVICES: ["repair", "cleaning", "tutoring"],
    Ad.Category.DONATIONS: ["clothes", "books", "food"],
}

LOCATIONS = ["Damascus", "Aleppo", "Homs", "Latakia", "Tartus", "Hama"]


def rand_sub_category(category):
    choices = SUB_CATEGORIES.get(category)
    return random.choice(choices) if choices else None


# ---------------------------------------------------------------------------

class UserFactory(DjangoModelFactory):
    """
    Regular account. CustomUser has no 'username' field, so we only set email, name and phone.
    Password is hashed in @post_generation.
    """
    class Meta:
        model = get_user_model()
        django_get_or_create = ("email",)

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = Faker("name")
    phone_number = Faker("numerify", text="+9639########")

    @post_generation
    def password(self, create, extracted, **kwargs):
        pwd = extracted or "Passw0rd!"
        self.set_password(pwd)
        if create:
            self.save()


class AdminFactory(UserFactory):
    """Moderator account."""
    email = factory.Sequence(lambda n: f"admin{n}@example.com")
    role = "admin"
    is_staff = True


# ---------------------------------------------------------------------------

class AdFactory(DjangoModelFactory):
    """Pending ad in a non-job category by default; see the traits for the rest."""
    class Meta:
        model = Ad

    owner = factory.SubFactory(UserFactory)

    title = Faker("sentence", nb_words=4)
    description = Faker("paragraph", nb_sentences=3)
    category = Ad.Category.HOME
    sub_category = factory.LazyAttribute(lambda o: rand_sub_category(o.category))
    price = factory.LazyFunction(lambda: f"{random.randrange(10, 5000)}$")
    location = factory.LazyFunction(lambda: random.choice(LOCATIONS))
    whatsapp = Faker("numerify", text="+9639########")
    images = factory.LazyFunction(list)

    status = Ad.Status.PENDING
    is_featured = False

    class Params:
        approved = factory.Trait(status=Ad.Status.APPROVED)
        rejected = factory.Trait(status=Ad.Status.REJECTED, admin_note="Incomplete details")
        featured = factory.Trait(status=Ad.Status.APPROVED, is_featured=True)
        job = factory.Trait(
            category=Ad.Category.JOBS,
            sub_category=None,
            job_type=factory.LazyFunction(lambda: random.choice(Ad.JobType.values)),
            job_experience=factory.LazyFunction(lambda: random.choice(Ad.JobExperience.values)),
        )
