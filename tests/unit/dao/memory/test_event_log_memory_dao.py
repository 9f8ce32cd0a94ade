"""Unit tests for the in-memory event log.

Test coverage includes:
    1. Entries are returned newest first.
    2. The log keeps only its most recent `capacity` entries.
    3. write() never raises.
    4. clear() empties the log.
"""

from unittest.mock import MagicMock

from freezegun import freeze_time

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.dao.memory import EventLogMemoryDAO


@freeze_time('2025-10-15 12:00:00')
def test_write_and_read(event_log):
    first = event_log.write('short_created', {'shortcode': 'abc'})
    second = event_log.write('redirect_click', {'code': 'abc'})

    entries = event_log.read()

    assert [entry.id for entry in entries] == [second.id, first.id]
    assert entries[0].event == 'redirect_click'
    assert entries[0].payload == {'code': 'abc'}
    assert entries[0].to_dict()['ts'] == '2025-10-15T12:00:00.000000Z'


def test_write_without_payload(event_log):
    entry = event_log.write('copied')

    assert entry.payload == {}


def test_log_capacity_drops_oldest_entries(memory_store):
    log = EventLogMemoryDAO(store=memory_store, prefix='testapp:test')
    written = [log.write('copied', {'i': i}) for i in range(1001)]

    entries = log.read()

    assert len(entries) == 1000
    assert entries[0].id == written[-1].id
    assert entries[-1].id == written[1].id
    assert written[0].id not in {entry.id for entry in entries}


def test_write_never_raises(memory_store):
    log = EventLogMemoryDAO(store=memory_store)
    memory_store.set = MagicMock(side_effect=DataStoreError('disk full'))

    assert log.write('copied', {'text': 'x'}) is None


def test_unreadable_log_reads_as_empty(memory_store, app_prefix):
    log = EventLogMemoryDAO(store=memory_store, prefix=app_prefix)
    memory_store.set(f'{app_prefix}:logs', '{not json')

    assert log.read() == []

    entry = log.write('copied')
    assert [e.id for e in log.read()] == [entry.id]


def test_clear(event_log):
    event_log.write('copied')

    event_log.clear()

    assert event_log.read() == []
