from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APITestCase

from badel.ads.factories import AdFactory, AdminFactory, UserFactory
from badel.ads.models import Ad
from badel.ads.snapshot import snapshot_cache


class AdminUsersApiTests(APITestCase):
    def setUp(self):
        self.admin = AdminFactory()
        self.member = UserFactory()
        self.client.force_authenticate(self.admin)

    def test_list_users_with_ad_counts(self):
        AdFactory(owner=self.member)
        AdFactory(owner=self.member, approved=True)
        res = self.client.get(reverse("users-admin:user-list"))
        self.assertEqual(res.status_code, 200)
        counts = {row["id"]: row["ads_count"] for row in res.data}
        self.assertEqual(counts[self.member.id], 2)
        self.assertEqual(counts[self.admin.id], 0)

    def test_delete_user_cascades_ads_and_invalidates_feed(self):
        ad = AdFactory(owner=self.member, approved=True)
        self.client.get(reverse("ads:ad-list"))
        generation = snapshot_cache.generation

        with self.captureOnCommitCallbacks(execute=True):
            res = self.client.delete(reverse("users-admin:user-detail", args=[self.member.id]))
        self.assertEqual(res.status_code, 204)
        self.assertFalse(get_user_model().objects.filter(pk=self.member.id).exists())
        self.assertFalse(Ad.objects.filter(pk=ad.id).exists())
        self.assertGreater(snapshot_cache.generation, generation)

        self.client.force_authenticate(None)
        self.assertEqual(self.client.get(reverse("ads:ad-list")).data["total"], 0)

    def test_admin_cannot_delete_self(self):
        res = self.client.delete(reverse("users-admin:user-detail", args=[self.admin.id]))
        self.assertEqual(res.status_code, 400)
        self.assertTrue(get_user_model().objects.filter(pk=self.admin.id).exists())

    def test_regular_user_forbidden(self):
        self.client.force_authenticate(self.member)
        self.assertEqual(self.client.get(reverse("users-admin:user-list")).status_code, 403)
        res = self.client.delete(reverse("users-admin:user-detail", args=[self.admin.id]))
        self.assertEqual(res.status_code, 403)
