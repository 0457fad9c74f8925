"""Infer a named schema from sample files and print it as JSON.

Usage (from repository root):
    python scripts/infer_samples.py samples/*.json
    python scripts/infer_samples.py --format csv --numeric-column price orders.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Make `typeforge` imports work when the package is not installed.
PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from typeforge.config import get_settings
from typeforge.errors import MalformedInputError, NamingCollisionExhaustedError
from typeforge.inference import infer_schema
from typeforge.inference.naming import to_type_name
from typeforge.services.inference import build_run_result
from typeforge.values import SAMPLE_FORMATS, RawValue, parse_documents

_SUFFIX_FORMATS = {
    ".json": "json",
    ".jsonl": "jsonl",
    ".ndjson": "jsonl",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".csv": "csv",
}


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    parser = argparse.ArgumentParser(description="Infer a named schema from sample data files.")
    parser.add_argument("paths", nargs="+", type=Path, help="Sample files to read.")
    parser.add_argument(
        "--format",
        choices=SAMPLE_FORMATS,
        default=None,
        help="Sample format (default: detected from each file suffix).",
    )
    parser.add_argument("--root-name", default=None, help="Name of the root type (default: settings).")
    parser.add_argument(
        "--numeric-column",
        action="append",
        default=[],
        help="CSV column to parse as numbers; may be repeated.",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Force the thread-pool map-reduce regardless of sample count.",
    )
    return parser.parse_args()


def load_samples(paths: list[Path], fmt: str | None, numeric_columns: list[str]) -> list[RawValue]:
    """Read and parse every sample file in order."""

    samples: list[RawValue] = []
    for path in paths:
        file_format = fmt or _SUFFIX_FORMATS.get(path.suffix.lower())
        if file_format is None:
            raise MalformedInputError(f"Cannot detect sample format of {path}; pass --format")
        samples.extend(
            parse_documents(path.read_text(encoding="utf-8"), file_format, numeric_columns=numeric_columns)
        )
    return samples


def main() -> int:
    args = parse_args()
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s %(message)s")

    root_name = to_type_name(args.root_name or settings.root_type_name)
    try:
        samples = load_samples(args.paths, args.format, args.numeric_column)
        result = infer_schema(samples, root_name=root_name, parallel=True if args.parallel else None)
    except (MalformedInputError, NamingCollisionExhaustedError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    payload = build_run_result(result, root_type_name=root_name)
    print(payload.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
