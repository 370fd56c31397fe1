# donors/management/commands/import_requests.py
"""
Django Management Command to load hospital blood requests into the shared store
Stands in for the hospital dashboard during local development and demos

USAGE:
    python manage.py import_requests requests.json
    python manage.py import_requests requests.xlsx --append

Columns / keys: id, hospitalName, hospitalLat, hospitalLon, bloodGroup (or group),
urgency, component, acceptedDonors (';'-separated in CSV/Excel)
"""
import json
import os

import pandas as pd
from django.core.management.base import BaseCommand, CommandError

from donors.exceptions import CorruptStoreError
from donors.serializers import DonationRequestSerializer
from donors.services import find_request
from donors.store import CacheStore, load_requests, save_requests


def read_records(path):
    """Read raw request records from JSON, CSV or Excel."""
    if path.endswith('.json'):
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise CommandError('JSON file must contain a list of requests')
        return data

    if path.endswith('.csv'):
        df = pd.read_csv(path, dtype={'id': str})
    elif path.endswith(('.xlsx', '.xls')):
        df = pd.read_excel(path, dtype={'id': str})
    else:
        raise CommandError(f'Unsupported file type: {path}')

    records = []
    for _, row in df.iterrows():
        record = {}
        for column, value in row.items():
            if not pd.notna(value):
                continue
            # numpy scalars -> plain Python so the store stays JSON-compatible
            record[column] = value.item() if hasattr(value, 'item') else value

        accepted = record.get('acceptedDonors')
        if isinstance(accepted, str):
            record['acceptedDonors'] = [d.strip() for d in accepted.split(';') if d.strip()]

        records.append(record)
    return records


class Command(BaseCommand):
    help = 'Load blood requests from a JSON, CSV or Excel file into the shared request store'

    def add_arguments(self, parser):
        parser.add_argument('file', type=str, help='Path to the request file')
        parser.add_argument(
            '--append',
            action='store_true',
            help='Merge into the existing collection (same id replaces) instead of overwriting it',
        )

    def handle(self, *args, **options):
        path = options['file']

        if not os.path.exists(path):
            raise CommandError(f'File not found: {path}')

        records = read_records(path)
        self.stdout.write(f'📊 Found {len(records)} requests in {path}')

        store = CacheStore()
        try:
            collection = load_requests(store) if options['append'] else []
        except CorruptStoreError as e:
            raise CommandError(f'Cannot append to the current store: {e}')

        imported_count = 0
        replaced_count = 0
        errors = []

        for index, record in enumerate(records):
            serializer = DonationRequestSerializer(data=record)
            if not serializer.is_valid():
                errors.append(f'#{index + 1}: {serializer.errors}')
                continue

            request_id = record.get('id')
            existing = find_request(collection, request_id)
            if existing is not None:
                collection[collection.index(existing)] = record
                replaced_count += 1
            else:
                collection.append(record)
                imported_count += 1

        save_requests(store, collection)

        self.stdout.write(self.style.SUCCESS(f'✅ Imported: {imported_count}'))
        if replaced_count:
            self.stdout.write(self.style.WARNING(f'🔄 Replaced: {replaced_count}'))
        if errors:
            self.stdout.write(self.style.ERROR(f'❌ Skipped:  {len(errors)}'))
            for error in errors:
                self.stdout.write(f'   - {error}')
        self.stdout.write(f'📈 Store now holds {len(collection)} requests')
