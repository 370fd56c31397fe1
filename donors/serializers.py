# donors/serializers.py
"""
Normalization at the storage boundary.

Stored records come from the hospital side and from older dashboard builds,
so the same request can carry its blood group under 'bloodGroup' or under the
legacy 'group' key. These serializers map both shapes onto the canonical
records in donors.records before any matching logic runs.
"""
import logging

from rest_framework import serializers

from .exceptions import CorruptStoreError
from .records import DonorProfile, DonationRequest

logger = logging.getLogger(__name__)

# Only shown on the alert card, so a bad value falls back to the default
DISPLAY_FIELDS = ('hospitalName', 'urgency', 'component')


class BlankAsNoneMixin:
    """Hospital forms store empty inputs as '' - treat them as missing."""

    def to_internal_value(self, data):
        if isinstance(data, str) and data.strip() == '':
            return None
        return super().to_internal_value(data)


class OptionalFloatField(BlankAsNoneMixin, serializers.FloatField):
    pass


class OptionalIntegerField(BlankAsNoneMixin, serializers.IntegerField):
    pass


def _text(**kwargs):
    # Stored values are matched exactly, so whitespace is kept as-is
    return serializers.CharField(
        allow_blank=True, allow_null=True, default='', trim_whitespace=False, **kwargs
    )


class DonorProfileSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    bloodGroup = serializers.CharField(source='blood_group', trim_whitespace=False)
    lat = serializers.FloatField()
    lng = serializers.FloatField()

    def create(self, validated_data):
        return DonorProfile(**validated_data)


class DonationRequestSerializer(serializers.Serializer):
    id = _text()
    hospitalName = _text(source='hospital_name')
    hospitalLat = OptionalFloatField(source='hospital_lat', allow_null=True, default=None)
    hospitalLon = OptionalFloatField(source='hospital_lon', allow_null=True, default=None)

    # Canonical key first, legacy key as fallback (see validate)
    bloodGroup = _text(source='blood_group')
    group = _text(source='legacy_group')

    urgency = OptionalIntegerField(allow_null=True, default=None)
    component = _text()
    acceptedDonors = serializers.ListField(
        source='accepted_donors',
        child=serializers.CharField(trim_whitespace=False),
        allow_null=True,
        default=list,
    )

    def validate(self, attrs):
        legacy_group = attrs.pop('legacy_group', None)
        attrs['blood_group'] = attrs.get('blood_group') or legacy_group or ''

        for field in ('id', 'hospital_name', 'component'):
            attrs[field] = attrs.get(field) or ''

        # Keep first-acceptance order, drop repeats
        accepted = []
        for donor_id in attrs.get('accepted_donors') or []:
            if donor_id not in accepted:
                accepted.append(donor_id)
        attrs['accepted_donors'] = accepted
        return attrs

    def create(self, validated_data):
        return DonationRequest(**validated_data)


def normalize_profile(raw, key='profile'):
    """Turn a stored donor session payload into a DonorProfile."""
    serializer = DonorProfileSerializer(data=raw)
    if not serializer.is_valid():
        raise CorruptStoreError(key, serializer.errors)
    return serializer.save()


def normalize_requests(raw_requests, key='requests'):
    """
    Normalize the raw stored collection into DonationRequest records.

    Missing fields are filled with defaults, and so are display fields that
    fail to parse. Records of the wrong shape, or with unreadable coordinates
    or acceptances, raise CorruptStoreError instead of being dropped silently.
    """
    requests = []
    for index, record in enumerate(raw_requests):
        serializer = DonationRequestSerializer(data=record)
        if not serializer.is_valid():
            bad_fields = set(serializer.errors)
            if not bad_fields.issubset(DISPLAY_FIELDS):
                raise CorruptStoreError(key, f'record #{index}: {serializer.errors}')

            logger.warning(f"Request {record.get('id')} in '{key}': using defaults for {sorted(bad_fields)}")
            cleaned = {field: value for field, value in record.items() if field not in bad_fields}
            serializer = DonationRequestSerializer(data=cleaned)
            serializer.is_valid(raise_exception=True)
        requests.append(serializer.save())
    return requests
