from rest_framework import status
from rest_framework.exceptions import APIException


class CorruptStoreError(Exception):
    """The shared store holds a value the alert engine cannot interpret."""

    def __init__(self, key, detail):
        self.key = key
        self.detail = detail
        super().__init__(f"Store key '{key}' is corrupt: {detail}")


class StoreUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Request store is temporarily unreadable. Please try again shortly.'
    default_code = 'store_unavailable'
