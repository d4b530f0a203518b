"""
Ad lifecycle: pending -> approved / rejected, edits send an ad back to pending.

Every successful transition invalidates the in-memory feed before returning and
schedules a durable snapshot rebuild. Failed transitions change nothing and
invalidate nothing.
"""
import logging

from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import NotFound, PermissionDenied

from .content import build_content, content_fields
from .exceptions import InvalidTransition
from .models import Ad
from .permissions import is_admin
from .snapshot.tasks import publish_change

logger = logging.getLogger(__name__)

Status = Ad.Status

# action -> states it may start from
ALLOWED_SOURCES = {
    "approve": (Status.PENDING, Status.REJECTED),
    "reject": (Status.PENDING, Status.APPROVED),
    "edit": (Status.PENDING, Status.APPROVED, Status.REJECTED),
}

CONTENT_FIELDS = ("title", "description", "price", "location", "whatsapp", "images")
CATEGORY_FIELDS = ("category", "sub_category", "job_type", "job_experience")


def _require_admin(actor):
    if not is_admin(actor):
        raise PermissionDenied(_("Only administrators can moderate ads."))


def _locked_ad(ad_id):
    try:
        return Ad.objects.select_for_update().get(pk=ad_id)
    except (Ad.DoesNotExist, ValueError, TypeError):
        raise NotFound(_("Ad not found."))


def _check_transition(ad, action):
    if ad.status not in ALLOWED_SOURCES[action]:
        raise InvalidTransition(
            _("Cannot %(action)s an ad that is %(status)s.") % {"action": action, "status": ad.status}
        )


def _apply_changes(ad, changes):
    for field in CONTENT_FIELDS:
        if field in changes:
            setattr(ad, field, changes[field])

    if any(field in changes for field in CATEGORY_FIELDS):
        content = build_content(
            changes.get("category", ad.category),
            sub_category=changes.get("sub_category", ad.sub_category),
            job_type=changes.get("job_type", ad.job_type),
            job_experience=changes.get("job_experience", ad.job_experience),
        )
        for field, value in content_fields(content).items():
            setattr(ad, field, value)


def submit_ad(owner, data) -> Ad:
    """Create an ad for ``owner``. Status is always pending, whatever was sent."""
    ad = Ad(owner=owner, status=Status.PENDING, is_featured=False, admin_note="")
    _apply_changes(ad, data)
    ad.save()
    logger.info("Ad %s submitted by user %s", ad.pk, owner.pk)
    publish_change(f"submit:{ad.pk}")
    return ad


def approve_ad(actor, ad_id, featured=False) -> Ad:
    _require_admin(actor)
    with transaction.atomic():
        ad = _locked_ad(ad_id)
        _check_transition(ad, "approve")
        ad.status = Status.APPROVED
        ad.is_featured = bool(featured)
        ad.save(update_fields=["status", "is_featured", "updated_at"])
    logger.info("Ad %s approved by %s (featured=%s)", ad.pk, actor.pk, ad.is_featured)
    publish_change(f"approve:{ad.pk}")
    return ad


def reject_ad(actor, ad_id, reason="") -> Ad:
    _require_admin(actor)
    with transaction.atomic():
        ad = _locked_ad(ad_id)
        _check_transition(ad, "reject")
        ad.status = Status.REJECTED
        ad.admin_note = reason or ""
        ad.save(update_fields=["status", "admin_note", "updated_at"])
    logger.info("Ad %s rejected by %s", ad.pk, actor.pk)
    publish_change(f"reject:{ad.pk}")
    return ad


def edit_ad(actor, ad_id, changes) -> Ad:
    """Owner edit: overwrite content and send the ad back to moderation."""
    with transaction.atomic():
        ad = _locked_ad(ad_id)
        if ad.owner_id != getattr(actor, "pk", None):
            raise PermissionDenied(_("You are not allowed to edit this ad."))
        _check_transition(ad, "edit")
        was_public = ad.is_public
        _apply_changes(ad, changes)
        ad.status = Status.PENDING
        ad.admin_note = ""
        ad.save()
    logger.info("Ad %s edited by owner (was public: %s), back to pending", ad.pk, was_public)
    publish_change(f"edit:{ad.pk}")
    return ad


def admin_edit_ad(actor, ad_id, changes) -> Ad:
    """Admin edit: content and featured flag, moderation status untouched."""
    _require_admin(actor)
    with transaction.atomic():
        ad = _locked_ad(ad_id)
        _apply_changes(ad, changes)
        if "is_featured" in changes:
            ad.is_featured = bool(changes["is_featured"])
        ad.save()
    logger.info("Ad %s edited by admin %s", ad.pk, actor.pk)
    publish_change(f"admin-edit:{ad.pk}")
    return ad


def delete_ad(actor, ad_id):
    with transaction.atomic():
        ad = _locked_ad(ad_id)
        if ad.owner_id != getattr(actor, "pk", None) and not is_admin(actor):
            raise PermissionDenied(_("You are not allowed to delete this ad."))
        pk = ad.pk
        ad.delete()
    logger.info("Ad %s deleted by %s", pk, actor.pk)
    publish_change(f"delete:{pk}")
