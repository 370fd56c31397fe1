from django.conf import settings
from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from donors.exceptions import CorruptStoreError, StoreUnavailable
from donors.feed import ACCEPT_MESSAGE, build_feed
from donors.services import AlertService, resolve_profile
from donors.store import CacheStore, MappingStore, is_available, set_available


def _session_store(request):
    return MappingStore(request.session)


def _alert_service(request):
    try:
        donor = resolve_profile(_session_store(request), settings.LIFELINK_DEMO_DONOR)
    except CorruptStoreError as e:
        raise StoreUnavailable(str(e))
    return AlertService(CacheStore(), donor)


def _scan_feed(service):
    try:
        alerts = service.scan()
    except CorruptStoreError as e:
        raise StoreUnavailable(str(e))
    return build_feed(alerts, service.donor)


# ============================================
# ALERT FEED (polled by the dashboard every few seconds)
# ============================================
@api_view(['GET'])
def alert_feed(request):
    if not is_available(_session_store(request)):
        return Response({'status': 'offline'})

    service = _alert_service(request)
    feed = _scan_feed(service)
    feed['status'] = 'available'
    return Response(feed)


# ============================================
# ACCEPT BLOOD REQUEST
# ============================================
@api_view(['POST'])
def accept_request(request, request_id):
    service = _alert_service(request)

    try:
        accepted = service.accept(request_id)
    except CorruptStoreError as e:
        raise StoreUnavailable(str(e))

    if not accepted:
        raise NotFound('Blood request not found. It may have been closed by the hospital.')

    feed = _scan_feed(service)
    feed['status'] = 'available'
    feed['message'] = ACCEPT_MESSAGE
    return Response(feed)


# ============================================
# AVAILABILITY
# ============================================
@api_view(['POST'])
def toggle_availability(request):
    store = _session_store(request)
    available = set_available(store, not is_available(store))
    return Response({'status': 'available' if available else 'offline'})


@api_view(['POST'])
def logout(request):
    _session_store(request).remove(settings.LIFELINK_SESSION_KEY)
    return Response({'message': 'Logged out.'})


@api_view(['GET'])
def health_check(request):
    return Response({'status': 'healthy'})
