# Moderation state machine: allowed transitions, permissions, cache invalidation.
from django.test import TestCase
from rest_framework.exceptions import NotFound, PermissionDenied

from badel.ads.exceptions import InvalidTransition
from badel.ads.factories import AdFactory, AdminFactory, UserFactory
from badel.ads.models import Ad
from badel.ads.moderation import (
    submit_ad, approve_ad, reject_ad, edit_ad, admin_edit_ad, delete_ad,
)
from badel.ads.snapshot import snapshot_cache, durable_snapshot

AD_DATA = {
    "title": "Washing machine",
    "description": "Barely used",
    "category": "home",
    "sub_category": "appliances",
    "price": "150$",
    "location": "Homs",
    "whatsapp": "+963900000000",
    "images": [],
}


class ModerationTransitionTests(TestCase):
    def setUp(self):
        self.owner = UserFactory()
        self.admin = AdminFactory()
        self.stranger = UserFactory()

    def test_submit_always_starts_pending(self):
        ad = submit_ad(self.owner, {**AD_DATA, "status": "approved", "is_featured": True})
        self.assertEqual(ad.status, Ad.Status.PENDING)
        self.assertFalse(ad.is_featured)
        self.assertEqual(ad.owner, self.owner)

    def test_submit_drops_job_fields_outside_jobs(self):
        ad = submit_ad(self.owner, {**AD_DATA, "job_type": "remote", "job_experience": "senior"})
        self.assertIsNone(ad.job_type)
        self.assertIsNone(ad.job_experience)
        self.assertEqual(ad.sub_category, "appliances")

    def test_submit_job_ad_keeps_job_fields_and_no_sub_category(self):
        ad = submit_ad(self.owner, {**AD_DATA, "category": "jobs", "job_type": "remote", "job_experience": "any"})
        self.assertEqual(ad.job_type, "remote")
        self.assertEqual(ad.job_experience, "any")
        self.assertIsNone(ad.sub_category)

    def test_approve_pending_with_featured_flag(self):
        ad = AdFactory(owner=self.owner)
        approved = approve_ad(self.admin, ad.id, featured=True)
        self.assertEqual(approved.status, Ad.Status.APPROVED)
        self.assertTrue(approved.is_featured)

    def test_approve_rejected_ad(self):
        ad = AdFactory(rejected=True)
        self.assertEqual(approve_ad(self.admin, ad.id).status, Ad.Status.APPROVED)

    def test_approve_already_approved_is_invalid(self):
        ad = AdFactory(approved=True)
        with self.assertRaises(InvalidTransition):
            approve_ad(self.admin, ad.id)

    def test_reject_stores_reason(self):
        ad = AdFactory(approved=True)
        rejected = reject_ad(self.admin, ad.id, reason="Wrong category")
        self.assertEqual(rejected.status, Ad.Status.REJECTED)
        self.assertEqual(rejected.admin_note, "Wrong category")

    def test_reject_already_rejected_is_invalid(self):
        ad = AdFactory(rejected=True)
        with self.assertRaises(InvalidTransition):
            reject_ad(self.admin, ad.id)

    def test_only_admins_moderate(self):
        ad = AdFactory()
        with self.assertRaises(PermissionDenied):
            approve_ad(self.owner, ad.id)
        with self.assertRaises(PermissionDenied):
            reject_ad(self.stranger, ad.id)
        ad.refresh_from_db()
        self.assertEqual(ad.status, Ad.Status.PENDING)

    def test_edit_resets_approved_ad_to_pending(self):
        ad = AdFactory(owner=self.owner, featured=True)
        edited = edit_ad(self.owner, ad.id, {"title": "New title"})
        self.assertEqual(edited.status, Ad.Status.PENDING)
        self.assertEqual(edited.title, "New title")

    def test_edit_clears_admin_note(self):
        ad = AdFactory(owner=self.owner, rejected=True)
        edited = edit_ad(self.owner, ad.id, {"price": "negotiable"})
        self.assertEqual(edited.status, Ad.Status.PENDING)
        self.assertEqual(edited.admin_note, "")

    def test_edit_switching_to_jobs_clears_sub_category(self):
        ad = AdFactory(owner=self.owner, sub_category="furniture")
        edited = edit_ad(self.owner, ad.id, {"category": "jobs", "job_type": "part-time"})
        self.assertEqual(edited.category, "jobs")
        self.assertIsNone(edited.sub_category)
        self.assertEqual(edited.job_type, "part-time")

    def test_non_owner_cannot_edit_even_as_admin(self):
        ad = AdFactory(owner=self.owner, approved=True)
        for actor in (self.stranger, self.admin):
            with self.assertRaises(PermissionDenied):
                edit_ad(actor, ad.id, {"title": "Hijacked"})
        ad.refresh_from_db()
        self.assertEqual(ad.status, Ad.Status.APPROVED)
        self.assertNotEqual(ad.title, "Hijacked")

    def test_admin_edit_keeps_status_and_sets_featured(self):
        ad = AdFactory(approved=True)
        edited = admin_edit_ad(self.admin, ad.id, {"title": "Fixed typo", "is_featured": True})
        self.assertEqual(edited.status, Ad.Status.APPROVED)
        self.assertTrue(edited.is_featured)
        self.assertEqual(edited.title, "Fixed typo")

    def test_delete_by_owner_or_admin(self):
        own = AdFactory(owner=self.owner)
        other = AdFactory(owner=self.stranger)
        delete_ad(self.owner, own.id)
        delete_ad(self.admin, other.id)
        self.assertFalse(Ad.objects.filter(pk__in=[own.id, other.id]).exists())

    def test_delete_by_stranger_is_forbidden(self):
        ad = AdFactory(owner=self.owner)
        with self.assertRaises(PermissionDenied):
            delete_ad(self.stranger, ad.id)
        self.assertTrue(Ad.objects.filter(pk=ad.id).exists())

    def test_unknown_ad_is_not_found(self):
        for call in (
            lambda: approve_ad(self.admin, 999999),
            lambda: reject_ad(self.admin, 999999),
            lambda: edit_ad(self.owner, 999999, {"title": "x"}),
            lambda: delete_ad(self.admin, 999999),
        ):
            with self.assertRaises(NotFound):
                call()


class ModerationInvalidationTests(TestCase):
    def setUp(self):
        self.owner = UserFactory()
        self.admin = AdminFactory()

    def _prime(self):
        snapshot_cache.put([{"id": 0, "title": "old"}])
        return snapshot_cache.generation

    def test_successful_transitions_invalidate_and_rebuild_file(self):
        ad = AdFactory(owner=self.owner)
        for action in (
            lambda: approve_ad(self.admin, ad.id),
            lambda: reject_ad(self.admin, ad.id),
            lambda: edit_ad(self.owner, ad.id, {"title": "Edited"}),
            lambda: delete_ad(self.owner, ad.id),
        ):
            generation = self._prime()
            action()
            self.assertIsNone(snapshot_cache.get())
            self.assertEqual(snapshot_cache.generation, generation + 1)
            self.assertTrue(durable_snapshot.exists())

    def test_submit_invalidates(self):
        generation = self._prime()
        submit_ad(self.owner, AD_DATA)
        self.assertIsNone(snapshot_cache.get())
        self.assertEqual(snapshot_cache.generation, generation + 1)

    def test_failed_transitions_do_not_invalidate(self):
        ad = AdFactory(owner=self.owner, approved=True)
        generation = self._prime()
        for call, error in (
            (lambda: approve_ad(self.admin, ad.id), InvalidTransition),
            (lambda: approve_ad(self.owner, ad.id), PermissionDenied),
            (lambda: reject_ad(self.admin, 999999), NotFound),
            (lambda: edit_ad(self.admin, ad.id, {"title": "x"}), PermissionDenied),
        ):
            with self.assertRaises(error):
                call()
        self.assertIsNotNone(snapshot_cache.get())
        self.assertEqual(snapshot_cache.generation, generation)

    def test_rebuild_failure_does_not_fail_the_transition(self):
        ad = AdFactory(owner=self.owner)
        with self.settings(ADS_SNAPSHOT_FILE="/proc/badel-denied/ads-cache.json"), \
                self.assertLogs("badel.ads.snapshot.durable", level="ERROR"):
            approved = approve_ad(self.admin, ad.id)
        self.assertEqual(approved.status, Ad.Status.APPROVED)
