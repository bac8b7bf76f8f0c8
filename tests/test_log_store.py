"""Tests for core.log_store module."""

import dataclasses
from datetime import datetime

import pytest
from PIL import Image

from core.log_store import LogStore, get_log_store
from core.utils import CaptureRecord


def _record(prediction="Melanoma (92.00% confidence)", color=(200, 80, 60)):
    return CaptureRecord.create(
        image=Image.new("RGB", (150, 150), color),
        prediction=prediction,
        captured_at=datetime(2026, 10, 19, 15, 4),
    )


class TestLogStore:
    def test_starts_empty(self, log_store):
        assert log_store.count() == 0
        assert len(log_store) == 0
        assert log_store.all() == ()

    def test_append_and_count(self, log_store):
        log_store.append(_record())
        assert log_store.count() == 1
        assert len(log_store) == 1

    def test_insertion_order(self, log_store):
        records = [_record(prediction=f"Label {i} (50.00% confidence)") for i in range(5)]
        for r in records:
            log_store.append(r)
        assert list(log_store.all()) == records

    def test_snapshot_is_immutable(self, log_store):
        log_store.append(_record())
        snapshot = log_store.all()
        assert isinstance(snapshot, tuple)
        log_store.append(_record())
        assert len(snapshot) == 1
        assert log_store.count() == 2

    def test_duplicates_allowed(self, log_store):
        log_store.append(_record())
        log_store.append(_record())
        preds = [r.prediction for r in log_store.all()]
        assert preds == ["Melanoma (92.00% confidence)"] * 2

    def test_rejects_non_record(self, log_store):
        with pytest.raises(TypeError):
            log_store.append("Melanoma (92.00% confidence)")
        assert log_store.count() == 0

    def test_get_by_id(self, log_store):
        first, second = _record(), _record()
        log_store.append(first)
        log_store.append(second)
        assert log_store.get_by_id(second.identifier) is second

    def test_get_nonexistent(self, log_store):
        assert log_store.get_by_id("missing") is None

    def test_separate_stores_are_independent(self):
        a, b = LogStore(), LogStore()
        a.append(_record())
        assert b.count() == 0

    def test_singleton(self):
        assert get_log_store() is get_log_store()


class TestSubscribe:
    def test_listener_called_on_append(self, log_store):
        seen = []
        log_store.subscribe(seen.append)
        record = _record()
        log_store.append(record)
        assert seen == [record]

    def test_listener_sees_updated_store(self, log_store):
        counts = []
        log_store.subscribe(lambda r: counts.append(log_store.count()))
        log_store.append(_record())
        log_store.append(_record())
        assert counts == [1, 2]

    def test_unsubscribe(self, log_store):
        seen = []
        unsubscribe = log_store.subscribe(seen.append)
        log_store.append(_record())
        unsubscribe()
        log_store.append(_record())
        assert len(seen) == 1

    def test_unsubscribe_twice_is_harmless(self, log_store):
        unsubscribe = log_store.subscribe(lambda r: None)
        unsubscribe()
        unsubscribe()

    def test_listener_may_unsubscribe_itself(self, log_store):
        calls = []

        def once(record):
            calls.append(record)
            unsubscribe()

        unsubscribe = log_store.subscribe(once)
        log_store.append(_record())
        log_store.append(_record())
        assert len(calls) == 1


class TestCaptureRecord:
    def test_frozen(self):
        record = _record()
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.prediction = "Nevus (10.00% confidence)"

    def test_owns_image_copy(self):
        source = Image.new("RGB", (150, 150), (10, 20, 30))
        record = CaptureRecord.create(source, "Melanoma (92.00% confidence)")
        source.putpixel((0, 0), (255, 255, 255))
        assert record.image is not source
        assert record.image.getpixel((0, 0)) == (10, 20, 30)

    def test_unique_identifiers(self):
        ids = {_record().identifier for _ in range(50)}
        assert len(ids) == 50

    def test_default_timestamp(self):
        before = datetime.now()
        record = CaptureRecord.create(Image.new("RGB", (4, 4)), "x")
        assert before <= record.captured_at <= datetime.now()
