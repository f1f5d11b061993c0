# ABOUTME: Tests for the extraction sink and its manifest log
# ABOUTME: Log naming, header de-duplication, hashes, error lines and close-on-failure

from __future__ import annotations

import hashlib
from datetime import UTC, datetime

import pytest

from voiceline_extractor.core.models import Category, ProbeResult
from voiceline_extractor.persistence.sink import ExtractionSink, log_file_name
from voiceline_extractor.store.base import ResourceNotFound


def test_log_file_name_replaces_colons():
    timestamp = datetime(2024, 7, 2, 9, 30, 15, tzinfo=UTC)

    assert log_file_name(Category.BATTLE, timestamp) == "2024-07-02T09-30-15_battle.log"
    assert log_file_name("cutscene", timestamp) == "2024-07-02T09-30-15_cutscene.log"


def test_success_writes_file_and_hash_line(tmp_path, clock):
    with ExtractionSink(tmp_path, Category.BATTLE, clock=clock) as sink:
        entry = sink.record_success("sound/voice/vo_line/", "8201005_en.scd", b"voice")

    assert (tmp_path / "sound/voice/vo_line/8201005_en.scd").read_bytes() == b"voice"
    assert entry.content_hash == hashlib.sha256(b"voice").hexdigest()
    assert sink.log_path == tmp_path / "2024-07-02T09-30-15_battle.log"
    assert sink.log_path.read_text(encoding="utf-8") == (
        f"sound/voice/vo_line/, sha256\n8201005_en.scd, {entry.content_hash}\n"
    )


def test_header_written_once_per_directory(tmp_path, clock):
    with ExtractionSink(tmp_path, Category.CUTSCENE, clock=clock) as sink:
        sink.record_success("a/", "1.scd", b"1")
        sink.record_success("a/", "2.scd", b"2")
        sink.record_success("b/", "3.scd", b"3")

    lines = sink.log_path.read_text(encoding="utf-8").splitlines()
    assert [line for line in lines if line.endswith(", sha256")] == ["a/, sha256", "b/, sha256"]
    assert len(lines) == 5


def test_failure_appends_error_line(tmp_path, clock):
    result = ProbeResult(
        language="ja",
        directory="d/",
        file_name="7_ja.scd",
        exists=False,
        error=ResourceNotFound("d/7_ja.scd"),
    )

    with ExtractionSink(tmp_path, Category.BATTLE, clock=clock) as sink:
        entry = sink.record(result)

    assert entry.error_message == "d/7_ja.scd not found in store"
    assert sink.errors == 1
    assert sink.files_written == 0
    assert sink.log_path.read_text(encoding="utf-8").splitlines()[-1] == (
        "7_ja.scd, ERROR: d/7_ja.scd not found in store"
    )


def test_rerun_overwrites_files_and_starts_new_log(tmp_path, clock):
    with ExtractionSink(tmp_path, Category.BATTLE, clock=clock) as first:
        first.record_success("d/", "1_en.scd", b"old")
    with ExtractionSink(tmp_path, Category.BATTLE, clock=clock) as second:
        second.record_success("d/", "1_en.scd", b"new")

    assert (tmp_path / "d/1_en.scd").read_bytes() == b"new"
    assert first.log_path != second.log_path
    assert first.log_path.exists() and second.log_path.exists()


def test_log_closed_when_write_fails(tmp_path, clock):
    (tmp_path / "blocked").write_bytes(b"not a directory")

    with pytest.raises(OSError):
        with ExtractionSink(tmp_path, Category.BATTLE, clock=clock) as sink:
            sink.record_success("d/", "1_en.scd", b"kept")
            sink.record_success("blocked/", "2_en.scd", b"lost")

    assert not sink.is_open
    assert sink.log_path.read_text(encoding="utf-8").splitlines()[:2] == [
        "d/, sha256",
        f"1_en.scd, {hashlib.sha256(b'kept').hexdigest()}",
    ]


def test_writing_requires_open_sink(tmp_path, clock):
    sink = ExtractionSink(tmp_path, Category.BATTLE, clock=clock)

    with pytest.raises(RuntimeError):
        sink.record_failure("d/", "1_en.scd", "boom")


def test_runs_in_the_same_second_get_separate_logs(tmp_path):
    def frozen():
        return datetime(2024, 7, 2, 9, 30, 15, tzinfo=UTC)

    with ExtractionSink(tmp_path, Category.BATTLE, clock=frozen) as first:
        first.record_success("d/", "1_en.scd", b"one")
    with ExtractionSink(tmp_path, Category.BATTLE, clock=frozen) as second:
        second.record_success("d/", "1_en.scd", b"two")

    assert first.log_path.name == "2024-07-02T09-30-15_battle.log"
    assert second.log_path.name == "2024-07-02T09-30-15-1_battle.log"
    assert first.log_path.read_text(encoding="utf-8").splitlines() == [
        "d/, sha256",
        f"1_en.scd, {hashlib.sha256(b'one').hexdigest()}",
    ]
    assert second.log_path.read_text(encoding="utf-8").splitlines() == [
        "d/, sha256",
        f"1_en.scd, {hashlib.sha256(b'two').hexdigest()}",
    ]


def test_sequence_suffix_keeps_category_last():
    timestamp = datetime(2024, 7, 2, 9, 30, 15, tzinfo=UTC)

    assert log_file_name(Category.MAHJONG, timestamp, 2) == "2024-07-02T09-30-15-2_mahjong.log"


def test_sink_keeps_counters_not_entries(tmp_path, clock):
    with ExtractionSink(tmp_path, Category.BATTLE, clock=clock) as sink:
        for index in range(300):
            sink.record_success("d/", f"{index}_en.scd", b"x")
        sink.record_failure("d/", "300_en.scd", "unreadable")

    assert sink.files_written == 300
    assert sink.errors == 1
    assert not any(isinstance(value, list) for value in vars(sink).values())
    assert len(sink.log_path.read_text(encoding="utf-8").splitlines()) == 302
