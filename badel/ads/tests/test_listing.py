# Public feed resolution: source order, filters, pagination clamp, stale fallbacks.
from datetime import timedelta
from unittest import mock

from django.db import OperationalError
from django.test import TestCase, SimpleTestCase, override_settings
from django.utils import timezone

from badel.ads.exceptions import UpstreamUnavailable
from badel.ads.factories import AdFactory, AdminFactory, UserFactory
from badel.ads.listing import (
    list_ads, resolve_snapshot, clamp_pagination, filter_ads, category_counts,
    SOURCE_MEMORY, SOURCE_FILE, SOURCE_STORE,
)
from badel.ads.models import Ad
from badel.ads.moderation import approve_ad, edit_ad, reject_ad
from badel.ads.snapshot import snapshot_cache, durable_snapshot


def ids(ads):
    return [ad["id"] for ad in ads]


class ClampPaginationTests(SimpleTestCase):
    @override_settings(ADS_PAGE_DEFAULT_LIMIT=20, ADS_PAGE_MAX_LIMIT=100)
    def test_malformed_values_fall_back_to_defaults(self):
        self.assertEqual(clamp_pagination(0, -5), (1, 20))
        self.assertEqual(clamp_pagination(-3, 0), (1, 20))
        self.assertEqual(clamp_pagination("abc", "xyz"), (1, 20))
        self.assertEqual(clamp_pagination(None, None), (1, 20))
        self.assertEqual(clamp_pagination("2", "5"), (2, 5))

    @override_settings(ADS_PAGE_DEFAULT_LIMIT=20, ADS_PAGE_MAX_LIMIT=100)
    def test_limit_is_capped(self):
        self.assertEqual(clamp_pagination(1, 1000), (1, 100))


class FilterAdsTests(SimpleTestCase):
    ADS = (
        {"id": 1, "category": "cars", "subCategory": "suv"},
        {"id": 2, "category": "cars", "subCategory": "sedan"},
        {"id": 3, "category": "home", "subCategory": None},
        {"id": 4, "category": "jobs", "subCategory": None},
    )

    def test_all_or_absent_category_means_no_filter(self):
        self.assertEqual(ids(filter_ads(self.ADS)), [1, 2, 3, 4])
        self.assertEqual(ids(filter_ads(self.ADS, category="all")), [1, 2, 3, 4])

    def test_category_then_sub_category_exact_match(self):
        self.assertEqual(ids(filter_ads(self.ADS, category="cars")), [1, 2])
        self.assertEqual(ids(filter_ads(self.ADS, category="cars", sub_category="suv")), [1])
        self.assertEqual(ids(filter_ads(self.ADS, category="cars", sub_category="SUV")), [])

    def test_no_match_is_empty_not_error(self):
        self.assertEqual(filter_ads(self.ADS, category="donations"), [])

    def test_category_counts_cover_every_category(self):
        counts = category_counts(self.ADS)
        self.assertEqual(set(counts), set(Ad.Category.values))
        self.assertEqual(counts["cars"], 2)
        self.assertEqual(counts["donations"], 0)


class ListAdsTests(TestCase):
    def setUp(self):
        self.owner = UserFactory()
        self.admin = AdminFactory()

    def _aged(self, ad, minutes):
        Ad.objects.filter(pk=ad.pk).update(created_at=timezone.now() - timedelta(minutes=minutes))

    def test_only_approved_ads_are_listed(self):
        visible = AdFactory(approved=True)
        AdFactory()
        AdFactory(rejected=True)
        result = list_ads()
        self.assertEqual(ids(result.ads), [visible.id])
        self.assertEqual(result.total, 1)

    def test_featured_first_then_newest(self):
        old_featured = AdFactory(featured=True)
        new_plain = AdFactory(approved=True)
        old_plain = AdFactory(approved=True)
        new_featured = AdFactory(featured=True)
        self._aged(old_featured, 60)
        self._aged(old_plain, 30)
        self._aged(new_plain, 5)
        self._aged(new_featured, 1)

        result = list_ads()
        self.assertEqual(ids(result.ads), [new_featured.id, old_featured.id, new_plain.id, old_plain.id])

    def test_same_order_from_memory_file_and_store(self):
        for i in range(5):
            self._aged(AdFactory(approved=True, is_featured=i % 2 == 0), minutes=i)

        from_store = resolve_snapshot()
        self.assertEqual(from_store.source, SOURCE_STORE)
        from_memory = resolve_snapshot()
        self.assertEqual(from_memory.source, SOURCE_MEMORY)

        snapshot_cache.reset()
        durable_snapshot.rebuild()
        from_file = resolve_snapshot()
        self.assertEqual(from_file.source, SOURCE_FILE)

        self.assertEqual(ids(from_store.ads), ids(from_memory.ads))
        self.assertEqual(ids(from_store.ads), ids(from_file.ads))

    def test_second_read_is_served_from_memory_without_queries(self):
        AdFactory(approved=True)
        list_ads()
        with self.assertNumQueries(0):
            result = list_ads(category="home")
        self.assertEqual(result.source, SOURCE_MEMORY)

    def test_pagination_slices_filtered_set(self):
        created = [AdFactory(approved=True, category="cars") for _ in range(5)]
        AdFactory(approved=True, category="home")
        for minutes, ad in enumerate(created):
            self._aged(ad, minutes)

        result = list_ads(category="cars", page=2, limit=2)
        self.assertEqual(result.total, 5)
        self.assertEqual(result.pages, 3)
        self.assertEqual(ids(result.ads), [created[2].id, created[3].id])

    def test_malformed_pagination_returns_first_page(self):
        for _ in range(3):
            AdFactory(approved=True)
        result = list_ads(page=0, limit=-5)
        self.assertEqual((result.page, result.limit), (1, 20))
        self.assertEqual(len(result.ads), 3)

    def test_page_past_the_end_is_empty(self):
        AdFactory(approved=True)
        result = list_ads(page=5, limit=10)
        self.assertEqual(result.ads, [])
        self.assertEqual(result.total, 1)

    def test_approve_then_list_shows_ad_immediately(self):
        ad = AdFactory(owner=self.owner)
        self.assertEqual(list_ads().total, 0)  # primes the memory cache with an empty feed

        approve_ad(self.admin, ad.id)
        result = list_ads()
        self.assertEqual(ids(result.ads), [ad.id])
        self.assertFalse(result.stale)

    def test_edit_hides_previously_approved_ad(self):
        ad = AdFactory(owner=self.owner, approved=True)
        self.assertEqual(ids(list_ads().ads), [ad.id])

        edit_ad(self.owner, ad.id, {"title": "Updated"})
        self.assertEqual(list_ads().ads, [])

    def test_refill_after_invalidation_uses_new_file_not_old_one(self):
        first = AdFactory(approved=True)
        durable_snapshot.rebuild()
        list_ads()

        second = AdFactory(owner=self.owner)
        approve_ad(self.admin, second.id)  # invalidates, rewrites the file inline
        result = list_ads()
        self.assertEqual(result.source, SOURCE_FILE)
        self.assertEqual(set(ids(result.ads)), {first.id, second.id})

    def test_file_written_before_invalidation_is_skipped(self):
        AdFactory(approved=True)
        durable_snapshot.rebuild()
        snapshot_cache.invalidate()
        late = AdFactory(approved=True)

        result = list_ads()
        self.assertEqual(result.source, SOURCE_STORE)
        self.assertIn(late.id, ids(result.ads))

    def test_refill_racing_an_invalidation_is_not_cached(self):
        AdFactory(approved=True)

        def racing_fetch():
            ads = [{"id": 1, "category": "home", "subCategory": None}]
            snapshot_cache.invalidate()
            return ads

        with mock.patch("badel.ads.listing.fetch_public_ads", side_effect=racing_fetch):
            result = list_ads()
        self.assertEqual(ids(result.ads), [1])
        self.assertIsNone(snapshot_cache.peek())


class StaleFallbackTests(TestCase):
    def setUp(self):
        self.ad = AdFactory(approved=True)

    def _expire_memory(self):
        later = timezone.now() + timedelta(minutes=5)
        return mock.patch.object(snapshot_cache, "_clock", return_value=later)

    def _store_down(self):
        return mock.patch("badel.ads.listing.fetch_public_ads", side_effect=UpstreamUnavailable())

    def test_expired_memory_is_served_stale_when_store_is_down(self):
        list_ads()
        with self._expire_memory(), self._store_down(), \
                self.assertLogs("badel.ads.listing", level="WARNING"):
            result = list_ads()
        self.assertTrue(result.stale)
        self.assertEqual(result.source, SOURCE_MEMORY)
        self.assertEqual(ids(result.ads), [self.ad.id])

    def test_old_file_is_served_stale_when_store_is_down_and_memory_is_empty(self):
        durable_snapshot.rebuild()
        snapshot_cache.invalidate()
        with self._store_down():
            result = list_ads()
        self.assertTrue(result.stale)
        self.assertEqual(result.source, SOURCE_FILE)
        self.assertEqual(ids(result.ads), [self.ad.id])

    def test_nothing_cached_and_store_down_raises(self):
        with self._store_down(), self.assertRaises(UpstreamUnavailable):
            list_ads()

    def test_allow_stale_skips_the_store(self):
        list_ads()
        with self._expire_memory(), \
                mock.patch("badel.ads.listing.fetch_public_ads") as fetch:
            result = list_ads(allow_stale=True)
        fetch.assert_not_called()
        self.assertTrue(result.stale)
        self.assertEqual(ids(result.ads), [self.ad.id])

    def test_allow_stale_ignores_file_written_before_a_rejection(self):
        durable_snapshot.rebuild()
        list_ads()
        admin = AdminFactory()
        with mock.patch("badel.ads.snapshot.tasks.schedule_rebuild"):
            reject_ad(admin, self.ad.id)

        result = list_ads(allow_stale=True)
        self.assertNotIn(self.ad.id, ids(result.ads))
        self.assertEqual(result.source, SOURCE_STORE)
        self.assertFalse(result.stale)


class BrokenQuerySet:
    def __iter__(self):
        raise OperationalError("canceling statement due to statement timeout")


class StoreTimeoutTests(TestCase):
    """Database errors raised by the feed query itself, not by a patched fetch."""

    def setUp(self):
        self.ad = AdFactory(approved=True)

    def _store_times_out(self):
        return mock.patch("badel.ads.snapshot.store.approved_ads_queryset", return_value=BrokenQuerySet())

    def test_timeout_serves_expired_memory_as_stale(self):
        list_ads()
        later = timezone.now() + timedelta(minutes=5)
        with mock.patch.object(snapshot_cache, "_clock", return_value=later), \
                self._store_times_out(), \
                self.assertLogs("badel.ads.snapshot.store", level="WARNING"):
            result = list_ads()
        self.assertTrue(result.stale)
        self.assertEqual(result.source, SOURCE_MEMORY)
        self.assertEqual(ids(result.ads), [self.ad.id])

    def test_timeout_with_nothing_cached_raises(self):
        with self._store_times_out(), self.assertRaises(UpstreamUnavailable):
            list_ads()
