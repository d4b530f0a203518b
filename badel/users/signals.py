from django.db.models.signals import post_delete
from django.dispatch import receiver

from badel.ads.snapshot import publish_change_on_commit
from .models import CustomUser


@receiver(post_delete, sender=CustomUser)
def user_post_delete(sender, instance: CustomUser, **kwargs):
    """The user's ads are gone with them (cascade); refresh the public feed."""
    publish_change_on_commit(f"user-delete:{instance.pk}")
