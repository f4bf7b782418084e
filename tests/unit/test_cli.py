"""Tests for the ingest_claims command line."""

import json
import sys

import pytest

import ingest_claims as cli
from app.container import container
from app.models.analytics import AnalyticsSubject, SubjectKind
from app.repositories import ClaimsRepository, SnapshotRepository, UploadBatchRepository

MAPPING = {
    "Claim No": "claim_number",
    "Facility": "provider_name",
    "Insurer": "payer_name",
    "Scheme": "scheme_name",
    "Date of Service": "service_date",
    "Invoiced": "invoice_amount",
}
HEADER = "Claim No,Facility,Insurer,Scheme,Date of Service,Invoiced\n"


def run(monkeypatch, *args) -> int:
    monkeypatch.setattr(sys, "argv", ["ingest_claims.py", *args])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    return exc.value.code


@pytest.fixture(autouse=True)
def quiet(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda: None)


@pytest.fixture
def no_container(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("container initialized for a bad command line")

    monkeypatch.setattr(container, "init", fail)


@pytest.fixture
def wired(db, monkeypatch):
    monkeypatch.setattr("app.repositories.db.DB_PATH", ":memory:")
    container.reset()
    yield
    container.reset()


class TestUsage:
    @pytest.mark.parametrize(
        "args",
        [
            ("--recompute", "member"),
            ("--recompute", "payer", "provider"),
            ("--recompute", "--prune", "0"),
            ("--recompute", "--prune", "five"),
            ("claims.csv",),
            ("claims.csv", "--mapping", "m.json", "--batch", "1"),
            ("claims.csv", "--batch"),
            (),
        ],
    )
    def test_bad_arguments_print_usage(self, monkeypatch, capsys, no_container, args):
        assert run(monkeypatch, *args) == 1
        assert "Usage" in capsys.readouterr().out


class TestLoad:
    def test_load_then_reuse_batch_mappings(self, wired, monkeypatch, capsys, tmp_path):
        mapping = tmp_path / "mapping.json"
        mapping.write_text(json.dumps(MAPPING))
        may = tmp_path / "may.csv"
        may.write_text(HEADER + "X-1,Clinic A,Jubilee,Gold,2025-05-10,1000\n")
        june = tmp_path / "june.csv"
        june.write_text(HEADER + "X-2,Clinic B,Jubilee,Gold,2025-06-10,500\n")

        assert run(monkeypatch, str(may), "--mapping", str(mapping)) == 0
        assert "Upload batch: 1" in capsys.readouterr().out

        assert run(monkeypatch, str(june), "--batch", "1") == 0
        assert "Upload batch: 2" in capsys.readouterr().out

        assert ClaimsRepository().claim_numbers() == {"X-1", "X-2"}
        assert UploadBatchRepository().get_by_id(2).filename == "june.csv"
        assert UploadBatchRepository().mappings(2) == UploadBatchRepository().mappings(1)

    def test_unknown_batch(self, wired, monkeypatch, tmp_path):
        path = tmp_path / "may.csv"
        path.write_text(HEADER + "X-1,Clinic A,Jubilee,Gold,2025-05-10,1000\n")

        assert run(monkeypatch, str(path), "--batch", "5") == 1
        assert ClaimsRepository().claim_numbers() == set()

    def test_rejected_rows_exit_2(self, wired, monkeypatch, capsys, tmp_path):
        mapping = tmp_path / "mapping.json"
        mapping.write_text(json.dumps(MAPPING))
        path = tmp_path / "may.csv"
        path.write_text(HEADER + "X-1,Clinic A,Jubilee,Gold,2025-05-10,-1\n")

        assert run(monkeypatch, str(path), "--mapping", str(mapping)) == 2
        out = capsys.readouterr().out
        assert "Found 1 error(s) in 1 row(s)" in out
        assert "Row 1 [invoice_amount]" in out

    def test_refresh_snapshots_touched_subjects(self, wired, monkeypatch, tmp_path):
        mapping = tmp_path / "mapping.json"
        mapping.write_text(json.dumps(MAPPING))
        path = tmp_path / "may.csv"
        path.write_text(HEADER + "X-1,Clinic A,Jubilee,Gold,2025-05-10,1000\n")

        assert run(monkeypatch, str(path), "--mapping", str(mapping), "--refresh") == 0

        snapshots = SnapshotRepository()
        for kind in SubjectKind:
            assert snapshots.count(AnalyticsSubject(kind, 1)) == 1


class TestRecompute:
    def test_single_kind(self, seeded, wired, monkeypatch):
        assert run(monkeypatch, "--recompute", "scheme") == 0

        snapshots = SnapshotRepository()
        assert snapshots.count(AnalyticsSubject(SubjectKind.SCHEME, seeded["gold"])) == 1
        assert snapshots.count(AnalyticsSubject(SubjectKind.PAYER, seeded["jubilee"])) == 0

    def test_all_with_prune(self, seeded, wired, monkeypatch):
        assert run(monkeypatch, "--recompute") == 0
        assert run(monkeypatch, "--recompute", "all", "--prune", "1") == 0

        assert SnapshotRepository().count(AnalyticsSubject(SubjectKind.PROVIDER, seeded["clinic_a"])) == 1
