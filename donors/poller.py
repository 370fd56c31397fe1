# donors/poller.py
"""
Poll loop that keeps a donor's alert feed fresh.

Two states: SCANNING re-reads the store and re-renders on every tick,
OFFLINE (donor switched availability off) skips the tick entirely.
Availability is sampled on every tick, not on change.
"""
import logging
import time

from django.conf import settings

from .exceptions import CorruptStoreError

logger = logging.getLogger(__name__)

SCANNING = 'scanning'
OFFLINE = 'offline'


class RequestPoller:
    def __init__(self, service, is_available, render, interval_ms=None, sleep=time.sleep):
        self.service = service
        self.is_available = is_available
        self.render = render
        self.interval_ms = interval_ms if interval_ms is not None else settings.LIFELINK_POLL_INTERVAL_MS
        self.sleep = sleep
        self.state = SCANNING

    def tick(self):
        """
        Run one poll.

        Returns the rendered alerts, or None when the donor is offline or
        the store could not be read.
        """
        state = SCANNING if self.is_available() else OFFLINE
        if state != self.state:
            logger.info(f"Donor {self.service.donor.id}: {self.state} -> {state}")
            self.state = state

        if state == OFFLINE:
            return None

        try:
            alerts = self.service.scan()
        except CorruptStoreError as e:
            logger.error(f"Poll skipped for donor {self.service.donor.id}: {e}")
            return None

        self.render(alerts)
        return alerts

    def run(self, max_ticks=None):
        """Tick every interval until max_ticks is reached (forever if None)."""
        ticks = 0
        logger.info(f"Polling every {self.interval_ms}ms for donor {self.service.donor.id}")
        while max_ticks is None or ticks < max_ticks:
            self.sleep(self.interval_ms / 1000)
            self.tick()
            ticks += 1
        return ticks
