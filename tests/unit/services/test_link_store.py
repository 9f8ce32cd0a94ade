"""Unit tests for LinkStore.

Test coverage includes:

1. Link creation
   - expire_at == created_at + validity (default 30 minutes).
   - Generated shortcodes are 7 alphanumeric characters and unique.
   - Custom shortcodes are trimmed, validated and checked for collisions.
   - Rejected drafts leave the store unchanged and are logged.
   - Generation gives up with ExhaustedCodeSpaceError.

2. Batch creation
   - All-or-nothing: the first failing row rejects the whole batch.
   - Batch size bounds.
   - Shortcodes claimed earlier in the same batch count as taken.

3. Lookup and update
   - find_by_code() round-trip.
   - update()/modify() replace the stored record by id.

4. Purging
   - Expiry boundary (1ms past vs 1ms ahead).
   - purge_expired() is idempotent.

5. Listing and filtering

6. Persistence failures
   - DataStoreError reaches the caller of insert, update, modify and purge_expired.
   - The stored collection is unchanged and no success events are logged.
"""

import random
from datetime import timedelta

import pytest
from freezegun import freeze_time

from linkshortener.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from linkshortener.exceptions import (
    InvalidURLError,
    InvalidValidityError,
    InvalidShortcodeError,
    ShortcodeCollisionError,
    BatchSizeError,
    ExhaustedCodeSpaceError,
)
from linkshortener.models import LinkDraft, ClickEventModel
from linkshortener.services import LinkStore, PurgeResult
from linkshortener.utils import CodeGenerator, utcnow, is_valid_shortcode
from linkshortener.utils.config import LinkSettings


class ConstantGenerator(CodeGenerator):
    """Generator that always draws the same shortcode."""

    def __init__(self, shortcode: str):
        super().__init__(rng=random.Random(0))
        self.shortcode = shortcode
        self.calls = 0

    def generate(self, length: int | None = None) -> str:
        self.calls += 1
        return self.shortcode


def events(event_log, name: str) -> list:
    return [entry for entry in event_log.read() if entry.event == name]


# -------------------------------
# 1. Link creation
# -------------------------------


@freeze_time('2025-10-15 12:00:00')
def test_insert_sets_expiry_from_validity(store):
    link = store.insert(LinkDraft(long_url='https://example.com', validity_minutes=10))

    assert link.created_at == utcnow()
    assert link.expire_at == link.created_at + timedelta(minutes=10)
    assert link.clicks == ()


def test_insert_uses_default_validity(store):
    link = store.insert(LinkDraft(long_url='https://example.com'))

    assert link.expire_at - link.created_at == timedelta(minutes=30)


def test_insert_uses_configured_default_validity(link_dao, event_log):
    store = LinkStore(link_dao, event_log, settings=LinkSettings(default_validity_minutes=5))

    link = store.insert(LinkDraft(long_url='https://example.com', validity_minutes=''))

    assert link.expire_at - link.created_at == timedelta(minutes=5)


def test_insert_generates_shortcode(store):
    link = store.insert(LinkDraft(long_url='https://example.com'))

    assert len(link.shortcode) == 7
    assert link.shortcode.isalnum()
    assert is_valid_shortcode(link.shortcode)


def test_inserted_shortcodes_are_unique(store):
    links = [store.insert(LinkDraft(long_url=f'https://example.com/{i}')) for i in range(50)]

    assert len({link.shortcode for link in links}) == 50
    assert len({link.id for link in links}) == 50


def test_insert_logs_creation(store, event_log):
    link = store.insert(LinkDraft(long_url='https://example.com', validity_minutes=15))

    [entry] = events(event_log, 'short_created')
    assert entry.payload == {'shortcode': link.shortcode, 'longUrl': 'https://example.com', 'minutes': 15}


def test_insert_custom_shortcode(store):
    link = store.insert(LinkDraft(long_url='https://example.com', shortcode='  promo2025 '))

    assert link.shortcode == 'promo2025'
    assert store.find_by_code('promo2025') == link


def test_insert_shortcode_collision(store, event_log):
    store.insert(LinkDraft(long_url='https://example.com', shortcode='abc'))

    with pytest.raises(ShortcodeCollisionError) as exc_info:
        store.insert(LinkDraft(long_url='https://example.org', shortcode='abc'))

    assert exc_info.value.row == 1
    assert exc_info.value.error_code == 'SHORTCODE_COLLISION'
    assert len(store.all()) == 1
    [entry] = events(event_log, 'validation_error')
    assert entry.payload == {'row': 1, 'reason': 'collision', 'value': 'abc'}


def test_insert_invalid_url_leaves_store_unchanged(store, event_log):
    store.insert(LinkDraft(long_url='https://example.com'))
    before = store.all()

    with pytest.raises(InvalidURLError, match="invalid URL 'not-a-url'"):
        store.insert(LinkDraft(long_url='not-a-url'))

    assert store.all() == before
    [entry] = events(event_log, 'validation_error')
    assert entry.payload['reason'] == 'invalid_url'


@pytest.mark.parametrize('validity', ['15.0', '+15', '1.5e1'])
def test_insert_accepts_integral_validity(store, validity):
    link = store.insert(LinkDraft(long_url='https://example.com', validity_minutes=validity))

    assert link.expire_at - link.created_at == timedelta(minutes=15)


@pytest.mark.parametrize('validity', [0, -1, 'abc', 1.5])
def test_insert_invalid_validity(store, validity):
    with pytest.raises(InvalidValidityError):
        store.insert(LinkDraft(long_url='https://example.com', validity_minutes=validity))

    assert store.all() == []


@pytest.mark.parametrize('shortcode', ['ab', 'a' * 16, 'abc-123', 'abc 12'])
def test_insert_invalid_shortcode(store, shortcode):
    with pytest.raises(InvalidShortcodeError):
        store.insert(LinkDraft(long_url='https://example.com', shortcode=shortcode))

    assert store.all() == []


def test_blank_shortcode_is_generated(store):
    link = store.insert(LinkDraft(long_url='https://example.com', shortcode='   '))

    assert len(link.shortcode) == 7


def test_generation_retries_on_collision(link_dao, event_log):
    store = LinkStore(link_dao, event_log, generator=ConstantGenerator('abcdefg'))
    store.insert(LinkDraft(long_url='https://example.com', shortcode='zzz'))

    link = store.insert(LinkDraft(long_url='https://example.com'))

    assert link.shortcode == 'abcdefg'


def test_generation_exhausts_code_space(link_dao, event_log):
    generator = ConstantGenerator('abcdefg')
    store = LinkStore(link_dao, event_log, generator=generator, settings=LinkSettings(max_generation_attempts=10))
    store.insert(LinkDraft(long_url='https://example.com'))
    generator.calls = 0

    with pytest.raises(ExhaustedCodeSpaceError):
        store.insert(LinkDraft(long_url='https://example.org'))

    assert generator.calls == 10
    assert len(store.all()) == 1


# -------------------------------
# 2. Batch creation
# -------------------------------


def test_insert_many_creates_all_links(store):
    drafts = [LinkDraft(long_url=f'https://example.com/{i}', validity_minutes=i + 1) for i in range(5)]

    links = store.insert_many(drafts)

    assert [link.long_url for link in links] == [draft.long_url for draft in drafts]
    assert store.all()[:5] == links


def test_insert_many_is_all_or_nothing(store, event_log):
    drafts = [
        LinkDraft(long_url='https://example.com/1'),
        LinkDraft(long_url='not-a-url'),
        LinkDraft(long_url='https://example.com/3', shortcode='x'),
    ]

    with pytest.raises(InvalidURLError) as exc_info:
        store.insert_many(drafts)

    assert exc_info.value.row == 2
    assert store.all() == []
    assert events(event_log, 'short_created') == []


def test_insert_many_collision_within_batch(store):
    drafts = [
        LinkDraft(long_url='https://example.com/1', shortcode='abc'),
        LinkDraft(long_url='https://example.com/2', shortcode='abc'),
    ]

    with pytest.raises(ShortcodeCollisionError) as exc_info:
        store.insert_many(drafts)

    assert exc_info.value.row == 2
    assert store.all() == []


@pytest.mark.parametrize('size', [0, 6])
def test_insert_many_batch_size(store, size):
    with pytest.raises(BatchSizeError):
        store.insert_many([LinkDraft(long_url='https://example.com')] * size)


def test_newest_links_come_first(store):
    first = store.insert(LinkDraft(long_url='https://example.com/1'))
    second = store.insert(LinkDraft(long_url='https://example.com/2'))

    assert store.all() == [second, first]


# -------------------------------
# 3. Lookup and update
# -------------------------------


def test_find_by_code_round_trip(store):
    link = store.insert(LinkDraft(long_url='https://example.com', shortcode='abc'))

    assert store.find_by_code('abc') == link
    assert store.find_by_code('ABC') is None
    assert store.find_by_code('missing') is None


def test_update_replaces_record(store):
    link = store.insert(LinkDraft(long_url='https://example.com'))
    clicked = link.with_click(ClickEventModel(ts=utcnow()))

    assert store.update(clicked) == clicked
    assert store.find_by_code(link.shortcode).total_clicks == 1


def test_modify_applies_change_to_stored_record(store):
    link = store.insert(LinkDraft(long_url='https://example.com'))
    click = ClickEventModel(ts=utcnow())

    store.modify(link.id, lambda current: current.with_click(click))
    updated = store.modify(link.id, lambda current: current.with_click(click))

    assert updated.total_clicks == 2


def test_update_unknown_link(store):
    link = store.insert(LinkDraft(long_url='https://example.com'))
    store.dao.save([])

    with pytest.raises(ShortLinkNotFoundError):
        store.update(link)


# -------------------------------
# 4. Purging
# -------------------------------


def test_expiry_boundary(store):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        link = store.insert(LinkDraft(long_url='https://example.com', validity_minutes=1))

        frozen.move_to(link.expire_at - timedelta(milliseconds=1))
        assert not link.is_expired(utcnow())
        assert store.purge_expired().removed_count == 0

        frozen.move_to(link.expire_at + timedelta(milliseconds=1))
        assert link.is_expired(utcnow())
        assert store.purge_expired().removed_count == 1


def test_purge_expired_keeps_live_links(store, event_log):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        short = store.insert(LinkDraft(long_url='https://example.com/short', validity_minutes=1))
        lasting = store.insert(LinkDraft(long_url='https://example.com/long', validity_minutes=60))

        frozen.tick(timedelta(minutes=2))
        result = store.purge_expired()

    assert result == PurgeResult(removed_count=1, before=2, after=1)
    assert store.all() == [lasting]
    assert store.find_by_code(short.shortcode) is None
    assert events(event_log, 'purge_expired')[0].payload == {'before': 2, 'after': 1}


def test_purge_expired_is_idempotent(store):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        store.insert(LinkDraft(long_url='https://example.com', validity_minutes=1))
        frozen.tick(timedelta(minutes=2))

        first = store.purge_expired()
        after_first = store.all()
        second = store.purge_expired()

    assert first.removed_count == 1
    assert second == PurgeResult(removed_count=0, before=0, after=0)
    assert store.all() == after_first


def test_purged_shortcode_can_be_reused(store):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        store.insert(LinkDraft(long_url='https://example.com', shortcode='abc', validity_minutes=1))
        frozen.tick(timedelta(minutes=2))
        store.purge_expired()

        link = store.insert(LinkDraft(long_url='https://example.org', shortcode='abc'))

    assert store.find_by_code('abc') == link


# -------------------------------
# 5. Listing and filtering
# -------------------------------


def test_filter_by_shortcode_substring(store):
    store.insert(LinkDraft(long_url='https://example.com/1', shortcode='promo1'))
    store.insert(LinkDraft(long_url='https://example.com/2', shortcode='promo2'))
    store.insert(LinkDraft(long_url='https://example.com/3', shortcode='other'))

    assert [link.shortcode for link in store.filter('promo')] == ['promo2', 'promo1']
    assert len(store.filter('')) == 3
    assert len(store.filter(None)) == 3
    assert store.filter('PROMO') == []


# -------------------------------
# 6. Persistence failures
# -------------------------------


def test_insert_persistence_failure_leaves_store_unchanged(store, failing_store, event_log):
    existing = store.insert(LinkDraft(long_url='https://example.com', shortcode='abc'))

    with pytest.raises(DataStoreError):
        failing_store.insert(LinkDraft(long_url='https://example.org'))
    with pytest.raises(DataStoreError):
        failing_store.insert_many([LinkDraft(long_url='https://example.org/1'), LinkDraft(long_url='https://example.org/2')])

    assert store.all() == [existing]
    assert [entry.payload['shortcode'] for entry in events(event_log, 'short_created')] == ['abc']


def test_update_persistence_failure_leaves_store_unchanged(store, failing_store):
    link = store.insert(LinkDraft(long_url='https://example.com'))
    click = ClickEventModel(ts=utcnow())

    with pytest.raises(DataStoreError):
        failing_store.update(link.with_click(click))
    with pytest.raises(DataStoreError):
        failing_store.modify(link.id, lambda current: current.with_click(click))

    assert store.find_by_code(link.shortcode) == link


def test_purge_persistence_failure_leaves_store_unchanged(store, failing_store, event_log):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        link = store.insert(LinkDraft(long_url='https://example.com', validity_minutes=1))
        frozen.tick(timedelta(minutes=2))

        with pytest.raises(DataStoreError):
            failing_store.purge_expired()

    assert store.all() == [link]
    assert events(event_log, 'purge_expired') == []
