#!/usr/bin/env python3
"""
Load claim files and precompute analytics.

Usage:
    python ingest_claims.py claims.xlsx --mapping mapping.json           # Load claims (.csv or .xlsx)
    python ingest_claims.py claims.csv --mapping mapping.json --refresh  # ...and refresh touched subjects
    python ingest_claims.py claims.csv --batch 7         # Reuse the column mappings of upload batch 7
    python ingest_claims.py --recompute                  # Recompute payer, provider and scheme analytics
    python ingest_claims.py --recompute payer            # Recompute payers only (payer|provider|scheme|all)
    python ingest_claims.py --recompute --prune 5        # ...and keep 5 snapshots per subject
"""

import sys
from pathlib import Path

from loguru import logger

from app.container import container
from app.errors import AnalyticsError, ValidationError
from app.models.analytics import AnalyticsSubject, SubjectKind
from app.repositories import UploadBatchRepository, get_db
from etl import ingest_claims, load_mappings, read_claims_file, summarize
from settings.logging import setup_logging


def _usage():
    print(__doc__)
    sys.exit(1)


def _option(args: list[str], name: str) -> str | None:
    """Value following `name` in args (removed from args), or None."""
    if name not in args:
        return None
    i = args.index(name)
    if i + 1 >= len(args):
        _usage()
    value = args[i + 1]
    del args[i : i + 2]
    return value


def _int_option(args: list[str], name: str) -> int | None:
    value = _option(args, name)
    if value is None:
        return None
    if not value.isdigit():
        _usage()
    return int(value)


def _kind(value: str | None) -> SubjectKind | None:
    """Subject kind named on the command line; None means all kinds."""
    if value in (None, "all"):
        return None
    if value not in [k.value for k in SubjectKind]:
        _usage()
    return SubjectKind(value)


def load(path: str, mapping_path: str | None, batch_id: int | None, refresh: bool) -> bool:
    """Load one claim file; optionally refresh analytics of touched subjects."""
    if mapping_path is not None:
        mappings = load_mappings(mapping_path)
    else:
        mappings = UploadBatchRepository().mappings(batch_id)
        if not mappings:
            raise ValidationError(f"No column mappings stored for upload batch {batch_id}")

    result = ingest_claims(get_db(), read_claims_file(path), mappings, filename=Path(path).name)

    print("\n" + "=" * 60)
    print("CLAIM LOAD REPORT")
    print("=" * 60)
    print(f"  File: {path}")
    print(f"  Upload batch: {result.batch_id}")
    print(f"  Processed: {result.processed:,}")
    print(f"  Failed: {result.failed:,}")
    print(f"  {summarize(result.errors)}")
    for err in result.errors[:20]:
        print(f"  ⚠️  Row {err.row} [{err.field}]: {err.error}")
    if len(result.errors) > 20:
        print(f"  ... and {len(result.errors) - 20} more")
    print("=" * 60 + "\n")

    if refresh:
        subjects = [AnalyticsSubject(SubjectKind.PAYER, i) for i in sorted(result.payer_ids)]
        subjects += [AnalyticsSubject(SubjectKind.PROVIDER, i) for i in sorted(result.provider_ids)]
        subjects += [AnalyticsSubject(SubjectKind.SCHEME, i) for i in sorted(result.scheme_ids)]
        for subject in subjects:
            container.analytics.refresh(subject)
        logger.info("Refreshed analytics for {} subjects", len(subjects))

    return result.failed == 0


def recompute(kind: SubjectKind | None, keep: int | None) -> bool:
    """Recompute and snapshot analytics for every subject of a kind (or all)."""
    counts = container.analytics.refresh_all(kind)
    if keep is not None:
        removed = container.analytics.prune(keep, kind)
        logger.info("Pruned {} old snapshots", removed)
    return counts["failed"] == 0


def main():
    args = sys.argv[1:]

    batch = _int_option(args, "--batch")
    keep = _int_option(args, "--prune")
    if keep == 0:
        _usage()
    mapping = _option(args, "--mapping")

    if "--recompute" in args:
        args.remove("--recompute")
        if len(args) > 1:
            _usage()
        kind = _kind(args[0] if args else None)

        def run():
            return recompute(kind, keep)

    else:
        refresh = "--refresh" in args
        files = [a for a in args if a != "--refresh"]
        if len(files) != 1 or (mapping is None) == (batch is None):
            _usage()

        def run():
            return load(files[0], mapping, batch, refresh)

    setup_logging()
    container.init()

    try:
        ok = run()
    except AnalyticsError as e:
        logger.error("{}: {}", e.code, e.message)
        sys.exit(1)

    sys.exit(0 if ok else 2)


if __name__ == "__main__":
    main()
