import django.utils.timezone
from django.db import migrations, models

import badel.users.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="CustomUser",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(
                    default=False,
                    help_text="Designates that this user has all permissions without explicitly assigning them.",
                    verbose_name="superuser status",
                )),
                ("is_staff", models.BooleanField(
                    default=False,
                    help_text="Designates whether the user can log into this admin site.",
                    verbose_name="staff status",
                )),
                ("is_active", models.BooleanField(
                    default=True,
                    help_text="Designates whether this user should be treated as active. "
                              "Unselect this instead of deleting accounts.",
                    verbose_name="active",
                )),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("email", models.EmailField(max_length=254, unique=True, verbose_name="email address")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("phone_number", models.CharField(blank=True, default="", max_length=30, verbose_name="phone number")),
                ("role", models.CharField(
                    choices=[("user", "User"), ("admin", "Admin")],
                    default="user", max_length=10, verbose_name="role",
                )),
                ("last_active", models.DateTimeField(default=django.utils.timezone.now, verbose_name="last active")),
                ("is_premium", models.BooleanField(default=False, verbose_name="premium")),
                ("premium_plan", models.CharField(
                    choices=[("none", "None"), ("gold", "Gold"), ("platinum", "Platinum")],
                    default="none", max_length=10,
                )),
                ("premium_expiry", models.DateTimeField(blank=True, null=True)),
                ("groups", models.ManyToManyField(
                    blank=True,
                    help_text="The groups this user belongs to. A user will get all permissions "
                              "granted to each of their groups.",
                    related_name="user_set", related_query_name="user",
                    to="auth.group", verbose_name="groups",
                )),
                ("user_permissions", models.ManyToManyField(
                    blank=True,
                    help_text="Specific permissions for this user.",
                    related_name="user_set", related_query_name="user",
                    to="auth.permission", verbose_name="user permissions",
                )),
            ],
            options={
                "ordering": ["-date_joined"],
            },
            managers=[
                ("objects", badel.users.models.CustomUserManager()),
            ],
        ),
    ]
