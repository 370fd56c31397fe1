# donors/management/commands/watch_requests.py
"""
Django management command that polls the shared store for blood requests
and prints the donor's alert feed on every tick.

Usage:
    python manage.py watch_requests
    python manage.py watch_requests --donor '{"id": "D-7", "name": "Asha", "bloodGroup": "O-", "lat": 12.97, "lng": 77.6}'
    python manage.py watch_requests --interval 5000 --ticks 10
"""
import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from donors.exceptions import CorruptStoreError
from donors.feed import ACCEPTED, build_feed
from donors.poller import RequestPoller
from donors.serializers import normalize_profile
from donors.services import AlertService, resolve_profile
from donors.store import CacheStore, is_available


class Command(BaseCommand):
    help = 'Poll the shared request store and print visible blood requests'

    def add_arguments(self, parser):
        parser.add_argument('--donor', type=str, help='Donor profile as JSON (defaults to the stored session)')
        parser.add_argument('--interval', type=int, help='Poll interval in milliseconds')
        parser.add_argument('--ticks', type=int, help='Stop after this many polls')

    def handle(self, *args, **options):
        store = CacheStore()

        try:
            if options['donor']:
                donor = normalize_profile(json.loads(options['donor']), key='--donor')
            else:
                donor = resolve_profile(store, settings.LIFELINK_DEMO_DONOR)
        except ValueError as e:
            raise CommandError(f'Invalid --donor JSON: {e}')
        except CorruptStoreError as e:
            raise CommandError(str(e))

        service = AlertService(store, donor)
        poller = RequestPoller(
            service,
            is_available=lambda: is_available(store),
            render=lambda alerts: self.render(build_feed(alerts, donor)),
            interval_ms=options['interval'],
        )

        self.stdout.write(self.style.SUCCESS(
            f'🩸 Watching requests for {donor.name} ({donor.blood_group}) every {poller.interval_ms}ms'
        ))

        try:
            ticks = poller.run(max_ticks=options['ticks'])
        except KeyboardInterrupt:
            self.stdout.write('\nStopped.')
            return

        self.stdout.write(f'Finished after {ticks} polls ({poller.state}).')

    def render(self, feed):
        if not feed['has_alerts']:
            self.stdout.write('📡 Scanning... no matching requests nearby')
            return

        self.stdout.write(self.style.WARNING(f"🔔 {feed['count']} alert(s)"))
        for card in feed['alerts']:
            line = (
                f"  [{card['id']}] {card['hospital_name']} - {card['distance_km']} km"
                f" | {card['blood_group']} {card['component']}"
            )
            if card['state'] == ACCEPTED:
                self.stdout.write(self.style.SUCCESS(f'{line} | ACCEPTED, en route'))
            else:
                self.stdout.write(f"{line} | {card['urgency_hours']}hr window")
