from django.core.management.base import BaseCommand, CommandError

from badel.ads.exceptions import UpstreamUnavailable
from badel.ads.snapshot import snapshot_cache, durable_snapshot


class Command(BaseCommand):
    help = "Rewrite the ad feed snapshot file from the store"

    def handle(self, *args, **opts):
        snapshot_cache.invalidate()
        try:
            snapshot = durable_snapshot.rebuild()
        except UpstreamUnavailable as exc:
            raise CommandError(f"Ad store unavailable: {exc}") from exc
        self.stdout.write(
            self.style.SUCCESS(
                f"Snapshot written to {durable_snapshot.path}: {snapshot.count} ads "
                f"(generated {snapshot.generated_at.isoformat()})"
            )
        )
