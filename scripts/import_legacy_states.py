"""
Import legacy card states exported from the old plugin.

The old plugin stored last_review_time sometimes in seconds and sometimes in
milliseconds. This importer does not guess: the unit is given on the command
line and applies to the whole file.

Input: one JSON object per line with keys
  user_id, vocab_id, stability, difficulty, last_review_time (epoch, 0 = never),
  lapse_count, consecutive_fails, phase (optional)

Usage:
  python scripts/import_legacy_states.py states.jsonl --unit ms
  python scripts/import_legacy_states.py states.jsonl --unit s --dry-run

Requires DATABASE_URL (and optionally TEST_MODE) in the environment.
"""

from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

from vocab_srs.fsrs import CardState, InvalidStateError
from vocab_srs.fsrs.database import init_db, save_card_state


def convert_record(record: dict, unit: str) -> CardState:
    """Turn one legacy record into a CardState (epoch -> aware datetime)."""
    raw = record.get("last_review_time") or 0
    divisor = 1000.0 if unit == "ms" else 1.0
    try:
        last_review_time = (
            datetime.fromtimestamp(float(raw) / divisor, tz=timezone.utc) if raw else None
        )
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise InvalidStateError(f"Bad last_review_time {raw!r}: {exc}") from exc
    return CardState.from_record({**record, "last_review_time": last_review_time})


def main() -> None:
    parser = argparse.ArgumentParser(description="Import legacy card states")
    parser.add_argument("path", type=Path, help="JSON lines file")
    parser.add_argument("--unit", choices=["s", "ms"], required=True, help="Unit of last_review_time")
    parser.add_argument("--dry-run", action="store_true", help="Validate only, write nothing")
    args = parser.parse_args()

    if not args.dry_run:
        init_db()

    imported = 0
    skipped = 0
    with args.path.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, 1):
            if not line.strip():
                continue
            record = json.loads(line)
            try:
                state = convert_record(record, args.unit)
            except InvalidStateError as exc:
                print(f"line {line_number}: skipped ({exc})")
                skipped += 1
                continue

            if not args.dry_run:
                save_card_state(str(record["user_id"]), str(record["vocab_id"]), state)
            imported += 1

    action = "Validated" if args.dry_run else "Imported"
    print(f"{action} {imported} card states, skipped {skipped}")


if __name__ == "__main__":
    main()
