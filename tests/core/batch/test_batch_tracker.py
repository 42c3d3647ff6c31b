"""Tests for FimblTracker: batch operations and the failure policy."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from fimbl.core.batch import BatchResult, FimblTracker
from fimbl.core.fingerprint import compute_fingerprint
from fimbl.core.report import ReportEvent, ReportKind
from fimbl.core.store import TrackingStore
from fimbl.discovery import canonicalize
from fimbl.exceptions import FileAccessError


@pytest.fixture
def tracker(store: TrackingStore) -> FimblTracker:
    return FimblTracker(store)


@pytest.fixture
def two_files(files_dir: Path) -> list[Path]:
    paths = [files_dir / "one.txt", files_dir / "two.txt"]
    for i, path in enumerate(paths):
        path.write_text(f"file {i}\n")
    return paths


class TestRoundTrip:

    def test_add_then_verify_clean(
        self, tracker: FimblTracker, two_files: list[Path]
    ) -> None:
        assert tracker.add(two_files).is_clean
        assert tracker.verify(two_files).is_clean
        assert tracker.verify_all().is_clean

    def test_drift_detected(self, tracker: FimblTracker, two_files: list[Path]) -> None:
        tracker.add(two_files)
        two_files[1].write_text("modified\n")
        result = tracker.verify(two_files)
        assert result.reports == [
            ReportEvent(ReportKind.CONTENT_CHANGED, canonicalize(two_files[1]))
        ]

    def test_accept_clears_drift(
        self, tracker: FimblTracker, two_files: list[Path]
    ) -> None:
        tracker.add(two_files)
        two_files[0].write_text("modified\n")
        assert tracker.accept([two_files[0]]).is_clean
        assert tracker.verify_all().is_clean

    def test_remove_then_list(self, tracker: FimblTracker, two_files: list[Path]) -> None:
        tracker.add(two_files)
        tracker.remove([two_files[0]])
        assert [p for p, _ in tracker.tracked()] == [canonicalize(two_files[1])]

    def test_remove_deleted_file(
        self, tracker: FimblTracker, two_files: list[Path]
    ) -> None:
        tracker.add(two_files)
        two_files[0].unlink()
        assert tracker.remove([two_files[0]]).is_clean

    def test_directories_reported(
        self, tracker: FimblTracker, files_dir: Path, two_files: list[Path]
    ) -> None:
        result = tracker.add([files_dir, *two_files])
        assert result.reports == [
            ReportEvent(ReportKind.IS_DIRECTORY, canonicalize(files_dir))
        ]
        assert len(tracker.tracked()) == 2

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need POSIX")
    def test_symlink_tracks_link_and_target(
        self, tracker: FimblTracker, sample_file: Path, files_dir: Path
    ) -> None:
        link = files_dir / "link"
        link.symlink_to(sample_file)
        tracker.add([link])
        fingerprints = dict(tracker.tracked())
        assert fingerprints[canonicalize(link)].is_symlink is True
        assert fingerprints[canonicalize(sample_file)].is_symlink is False


class TestFailurePolicy:

    def test_fail_fast_by_default(
        self, tracker: FimblTracker, two_files: list[Path], files_dir: Path
    ) -> None:
        missing = files_dir / "missing.txt"
        with pytest.raises(FileAccessError):
            tracker.add([two_files[0], missing, two_files[1]])
        # Files before the failure were stored; files after were not.
        assert [p for p, _ in tracker.tracked()] == [canonicalize(two_files[0])]

    def test_keep_going_records_failures(
        self, store: TrackingStore, two_files: list[Path], files_dir: Path
    ) -> None:
        tracker = FimblTracker(store, keep_going=True)
        missing = files_dir / "missing.txt"
        result = tracker.add([two_files[0], missing, two_files[1]])
        assert result.reports == []
        assert [p for p, _ in result.failures] == [canonicalize(missing)]
        assert not result.is_clean
        assert len(tracker.tracked()) == 2

    def test_verify_all_with_deleted_file(
        self, store: TrackingStore, two_files: list[Path]
    ) -> None:
        FimblTracker(store).add(two_files)
        two_files[0].unlink()
        with pytest.raises(FileAccessError):
            FimblTracker(store).verify_all()
        result = FimblTracker(store, keep_going=True).verify_all()
        assert [p for p, _ in result.failures] == [canonicalize(two_files[0])]

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need POSIX")
    def test_keep_going_skips_unreadable_link(
        self,
        store: TrackingStore,
        sample_file: Path,
        files_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        link = files_dir / "link"
        link.symlink_to(sample_file)
        real_readlink = os.readlink

        def refuse(path, *args, **kwargs):
            if Path(path).name == "link":
                raise PermissionError(13, "Permission denied", str(path))
            return real_readlink(path, *args, **kwargs)

        monkeypatch.setattr("fimbl.discovery.paths.os.readlink", refuse)
        with pytest.raises(FileAccessError):
            FimblTracker(store).add([link, sample_file])

        result = FimblTracker(store, keep_going=True).add([link, sample_file])
        assert result.failures == [(canonicalize(link), "Permission denied")]
        assert [p for p, _ in store.list_tracked()] == [canonicalize(sample_file)]

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need POSIX")
    def test_parent_segment_after_symlinked_directory(
        self, tracker: FimblTracker, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "a" / "b").mkdir(parents=True)
        real = tmp_path / "a" / "file"
        real.write_text("real\n")
        (tmp_path / "file").write_text("decoy\n")
        (tmp_path / "dirlink").symlink_to("a/b", target_is_directory=True)
        monkeypatch.chdir(tmp_path)

        result = tracker.add([Path("dirlink/../file")])

        assert result.is_clean
        assert tracker.tracked() == [(canonicalize(real), compute_fingerprint(real))]

    def test_injected_fingerprinter(
        self, store: TrackingStore, sample_file: Path, fingerprint_factory
    ) -> None:
        tracker = FimblTracker(store, fingerprinter=lambda _: fingerprint_factory())
        tracker.add([sample_file])
        assert tracker.tracked() == [(canonicalize(sample_file), fingerprint_factory())]


class TestBatchResult:

    def test_clean_when_empty(self) -> None:
        assert BatchResult().is_clean

    def test_not_clean_with_reports(self, files_dir: Path) -> None:
        result = BatchResult()
        result.extend([ReportEvent(ReportKind.NOT_TRACKED, files_dir)])
        assert not result.is_clean
