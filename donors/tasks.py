# donors/tasks.py
"""
Celery tasks for background request scanning
"""
import logging

from celery import shared_task
from django.conf import settings

from donors.poller import RequestPoller
from donors.services import AlertService, resolve_profile
from donors.store import CacheStore, is_available

logger = logging.getLogger(__name__)


def log_alerts(alerts):
    for alert in alerts:
        state = 'ACCEPTED' if alert.accepted else 'NEW'
        logger.info(f"[{state}] request {alert.request.id} - {alert.distance_km:.1f} km")


@shared_task
def scan_requests():
    """
    Run one poll for the donor held in the shared store.
    Scheduled by Celery beat at LIFELINK_POLL_INTERVAL_MS.
    """
    store = CacheStore()
    donor = resolve_profile(store, settings.LIFELINK_DEMO_DONOR)
    poller = RequestPoller(
        AlertService(store, donor),
        is_available=lambda: is_available(store),
        render=log_alerts,
    )

    alerts = poller.tick()
    if alerts is None:
        return f"Scan skipped for donor {donor.id} ({poller.state})"

    return f"{len(alerts)} alerts visible to donor {donor.id}"
