from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Ad",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=100)),
                ("description", models.TextField(max_length=1000)),
                ("category", models.CharField(
                    choices=[
                        ("home", "Home products"), ("cars", "Cars"), ("realestate", "Real estate"),
                        ("services", "Services"), ("jobs", "Jobs"), ("donations", "Donations"),
                    ],
                    max_length=20,
                )),
                ("sub_category", models.CharField(blank=True, max_length=50, null=True)),
                ("job_type", models.CharField(
                    blank=True, null=True, max_length=20,
                    choices=[
                        ("full-time", "Full time"), ("part-time", "Part time"),
                        ("remote", "Remote"), ("freelance", "Freelance"),
                    ],
                )),
                ("job_experience", models.CharField(
                    blank=True, null=True, max_length=20,
                    choices=[("entry", "Entry level"), ("mid", "Mid level"), ("senior", "Senior"), ("any", "Any")],
                )),
                ("price", models.CharField(max_length=50)),
                ("location", models.CharField(max_length=100)),
                ("whatsapp", models.CharField(max_length=30)),
                ("images", models.JSONField(blank=True, default=list)),
                ("status", models.CharField(
                    choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")],
                    default="pending", max_length=10,
                )),
                ("admin_note", models.TextField(blank=True, default="")),
                ("is_featured", models.BooleanField(default=False)),
                ("views", models.PositiveIntegerField(default=0)),
                ("contact_clicks", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="ads",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["category", "status"], name="ad_category_status_idx"),
                    models.Index(fields=["status", "is_featured", "created_at"], name="ad_feed_order_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MarketPrices",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("gold_ounce", models.DecimalField(decimal_places=2, default=Decimal("2750"), max_digits=12)),
                ("gold_lira", models.DecimalField(decimal_places=2, default=Decimal("580"), max_digits=12)),
                ("silver_ounce", models.DecimalField(decimal_places=2, default=Decimal("32"), max_digits=12)),
                ("dollar_rate", models.DecimalField(decimal_places=2, default=Decimal("89500"), max_digits=12)),
                ("updated_by", models.CharField(default="admin", max_length=100)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "market prices",
            },
        ),
    ]
