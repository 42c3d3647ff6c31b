"""Tests for the pure add / update / remove / verify decision rules."""

from __future__ import annotations

from datetime import datetime, timezone

from fimbl.core.records import (
    NOOP,
    Assert,
    Retract,
    decide_add,
    decide_remove,
    decide_update,
    decide_verify,
)
from fimbl.core.report import ReportKind

NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
EARLIER = datetime(2023, 6, 1, tzinfo=timezone.utc)


class TestDecideAdd:

    def test_absent_inserts_assert(self, fingerprint_factory) -> None:
        fp = fingerprint_factory()
        decision = decide_add(None, fp, tolerate_existing=False, now=NOW)
        assert decision.write == Assert(fp, NOW)
        assert decision.report is None

    def test_existing_strict_reports_already_tracked(self, fingerprint_factory) -> None:
        fp = fingerprint_factory()
        decision = decide_add(Assert(fp, EARLIER), fp, tolerate_existing=False)
        assert decision.write is None
        assert decision.report is ReportKind.ALREADY_TRACKED

    def test_existing_strict_reports_even_when_changed(self, fingerprint_factory) -> None:
        stored = Assert(fingerprint_factory(content=b"old"), EARLIER)
        decision = decide_add(stored, fingerprint_factory(content=b"new"), False)
        assert decision.report is ReportKind.ALREADY_TRACKED
        assert decision.write is None

    def test_existing_tolerant_match_is_noop(self, fingerprint_factory) -> None:
        fp = fingerprint_factory()
        assert decide_add(Assert(fp, EARLIER), fp, tolerate_existing=True) == NOOP

    def test_existing_tolerant_mismatch_reports_changed(self, fingerprint_factory) -> None:
        stored = Assert(fingerprint_factory(content=b"old"), EARLIER)
        decision = decide_add(stored, fingerprint_factory(content=b"new"), True)
        assert decision.report is ReportKind.CONTENT_CHANGED
        assert decision.write is None

    def test_retracted_is_treated_as_absent(self, fingerprint_factory) -> None:
        fp = fingerprint_factory()
        for tolerant in (False, True):
            decision = decide_add(Retract(EARLIER), fp, tolerant, now=NOW)
            assert decision.write == Assert(fp, NOW)
            assert decision.report is None


class TestDecideUpdate:

    def test_existing_assert_is_overwritten_without_comparing(
        self, fingerprint_factory
    ) -> None:
        stored = Assert(fingerprint_factory(content=b"old"), EARLIER)
        fp = fingerprint_factory(content=b"new")
        decision = decide_update(stored, fp, tolerate_untracked=False, now=NOW)
        assert decision.write == Assert(fp, NOW)
        assert decision.report is None

    def test_retracted_is_overwritten(self, fingerprint_factory) -> None:
        fp = fingerprint_factory()
        decision = decide_update(Retract(EARLIER), fp, False, now=NOW)
        assert decision.write == Assert(fp, NOW)

    def test_absent_strict_reports_not_tracked(self, fingerprint_factory) -> None:
        decision = decide_update(None, fingerprint_factory(), False)
        assert decision.report is ReportKind.NOT_TRACKED
        assert decision.write is None

    def test_absent_tolerant_inserts(self, fingerprint_factory) -> None:
        fp = fingerprint_factory()
        decision = decide_update(None, fp, tolerate_untracked=True, now=NOW)
        assert decision.write == Assert(fp, NOW)


class TestDecideRemove:

    def test_existing_is_retracted(self, fingerprint_factory) -> None:
        decision = decide_remove(Assert(fingerprint_factory(), EARLIER), False, now=NOW)
        assert decision.write == Retract(NOW)
        assert decision.report is None

    def test_retracted_is_retracted_again(self) -> None:
        decision = decide_remove(Retract(EARLIER), False, now=NOW)
        assert decision.write == Retract(NOW)

    def test_absent_strict_reports_not_tracked(self) -> None:
        decision = decide_remove(None, tolerate_untracked=False)
        assert decision.report is ReportKind.NOT_TRACKED
        assert decision.write is None

    def test_absent_tolerant_retracts(self) -> None:
        decision = decide_remove(None, tolerate_untracked=True, now=NOW)
        assert decision.write == Retract(NOW)
        assert decision.report is None


class TestDecideVerify:

    def test_absent_reports_not_tracked(self, fingerprint_factory) -> None:
        decision = decide_verify(None, fingerprint_factory())
        assert decision.report is ReportKind.NOT_TRACKED

    def test_retracted_reports_not_tracked(self, fingerprint_factory) -> None:
        decision = decide_verify(Retract(EARLIER), fingerprint_factory())
        assert decision.report is ReportKind.NOT_TRACKED

    def test_match_is_noop(self, fingerprint_factory) -> None:
        fp = fingerprint_factory()
        assert decide_verify(Assert(fp, EARLIER), fp).is_noop

    def test_any_field_mismatch_reports_changed(self, fingerprint_factory) -> None:
        stored = Assert(fingerprint_factory(), EARLIER)
        variants = [
            fingerprint_factory(content=b"other"),
            fingerprint_factory(is_symlink=True),
            fingerprint_factory(created=1),
            fingerprint_factory(modified=2),
            fingerprint_factory(unix_mode=0o100600),
            fingerprint_factory(read_only=True),
        ]
        for fp in variants:
            assert decide_verify(stored, fp).report is ReportKind.CONTENT_CHANGED

    def test_verify_never_writes(self, fingerprint_factory) -> None:
        stored = Assert(fingerprint_factory(), EARLIER)
        assert decide_verify(stored, fingerprint_factory(content=b"x")).write is None
        assert decide_verify(None, fingerprint_factory()).write is None
