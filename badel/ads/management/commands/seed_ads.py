import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from faker import Faker

from badel.ads.factories import LOCATIONS, rand_sub_category
from badel.ads.models import Ad
from badel.ads.snapshot import publish_change


class Command(BaseCommand):
    help = "Seed database with demo users and ads in every category and moderation status"

    def add_arguments(self, parser):
        parser.add_argument("--users", type=int, default=5, help="How many users to create")
        parser.add_argument("--ads", type=int, default=50, help="How many ads to create")
        parser.add_argument("--password", type=str, default="Passw0rd!", help="Default password for created users")
        parser.add_argument("--approved-share", type=float, default=0.7,
                            help="Share of ads created already approved (0..1)")

    def handle(self, *args, **opts):
        fake = Faker()
        User = get_user_model()

        users = []
        for i in range(opts["users"]):
            user, created = User.objects.get_or_create(
                email=f"user{i+1}@example.com",
                defaults={
                    "name": fake.name(),
                    "phone_number": fake.numerify(text="+9639########"),
                    "is_active": True,
                },
            )
            if created:
                user.set_password(opts["password"])
                user.save()
            users.append(user)

        if not users:
            self.stdout.write(self.style.WARNING("No users, nothing to seed."))
            return

        categories = Ad.Category.values
        for _ in range(opts["ads"]):
            category = random.choice(categories)
            is_job = category == Ad.Category.JOBS
            status = Ad.Status.APPROVED if random.random() < opts["approved_share"] else random.choice(
                [Ad.Status.PENDING, Ad.Status.REJECTED]
            )
            Ad.objects.create(
                title=fake.sentence(nb_words=5)[:100],
                description=fake.paragraph(nb_sentences=4)[:1000],
                category=category,
                sub_category=None if is_job else rand_sub_category(category),
                job_type=random.choice(Ad.JobType.values) if is_job else None,
                job_experience=random.choice(Ad.JobExperience.values) if is_job else None,
                price=f"{random.randrange(10, 5000)}$",
                location=random.choice(LOCATIONS),
                whatsapp=fake.numerify(text="+9639########"),
                status=status,
                is_featured=status == Ad.Status.APPROVED and random.random() < 0.15,
                owner=random.choice(users),
            )

        publish_change("seed")
        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(users)} users and {opts['ads']} ads. "
                f"Default user password: {opts['password']}"
            )
        )
