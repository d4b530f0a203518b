from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "badel.users"
    label = "users"

    def ready(self):
        # Cascade user deletion into the ad feed caches
        from . import signals  # noqa: F401
