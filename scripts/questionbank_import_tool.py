from __future__ import annotations

import argparse
import asyncio
import csv
import os
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy import delete
from sqlalchemy.engine import make_url

from trivia_engine.core.config import get_settings
from trivia_engine.db.models.questions import Question
from trivia_engine.db.repo.dialect_insert import insert_for
from trivia_engine.db.session import SessionLocal

REQUIRED_COLUMNS = {
    "question_id",
    "category",
    "question",
    "correct_answer",
}
DISTRACTOR_COLUMNS = ("distractor_1", "distractor_2", "distractor_3")
PRODUCTION_ENVS = {"production", "prod"}
REPLACE_ALL_CONFIRMATION = "PROD_REPLACE_ALL_OK"
REPLACE_ALL_CONFIRMATION_ENV = "QUESTIONBANK_REPLACE_ALL_CONFIRM"
MAX_CATEGORY_LENGTH = 64
MAX_QUESTION_ID_LENGTH = 64


@dataclass(slots=True)
class ImportSummary:
    total_rows_read: int = 0
    total_rows_imported: int = 0
    skipped_not_ready: int = 0


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import trivia question CSV files into questions.")
    parser.add_argument("--input", type=Path, default=Path("QuestionBank"))
    parser.add_argument(
        "--replace-all",
        action="store_true",
        help="Delete existing rows from questions before import.",
    )
    parser.add_argument(
        "--expected-db-name",
        default="",
        help="Database name that must match DATABASE_URL for a production replace-all.",
    )
    parser.add_argument("--dry-run", action="store_true")
    return parser.parse_args()


def _norm(value: Any) -> str:
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value).strip().lower())


def _validate_replace_all_safety(
    *,
    app_env: str,
    database_url: str,
    replace_all: bool,
    confirmation_value: str,
    expected_db_name: str,
) -> None:
    if not replace_all:
        return
    if app_env.strip().lower() not in PRODUCTION_ENVS:
        return
    if confirmation_value != REPLACE_ALL_CONFIRMATION:
        raise RuntimeError(
            "Refusing --replace-all in production without explicit confirmation: "
            f"set {REPLACE_ALL_CONFIRMATION_ENV}={REPLACE_ALL_CONFIRMATION}."
        )
    db_name = (make_url(database_url).database or "").strip()
    if not expected_db_name or expected_db_name != db_name:
        raise RuntimeError(
            f"Refusing --replace-all: expected DB name mismatch (expected={expected_db_name!r}, "
            f"actual={db_name!r})."
        )


def _csv_files(input_path: Path) -> list[Path]:
    if not input_path.exists():
        raise ValueError(f"input path does not exist: {input_path}")
    if input_path.is_file():
        return [input_path]
    return sorted(p for p in input_path.iterdir() if p.is_file() and p.suffix.lower() == ".csv")


def _read_csv(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        fieldnames = set(reader.fieldnames or [])
        missing = sorted(REQUIRED_COLUMNS - fieldnames)
        if missing:
            missing_str = ", ".join(missing)
            raise ValueError(f"{path.name}: missing required columns: {missing_str}")
        return [dict(row) for row in reader]


def _build_records(input_path: Path) -> tuple[list[dict[str, Any]], ImportSummary, Counter[str]]:
    summary = ImportSummary()
    by_category = Counter[str]()
    records: list[dict[str, Any]] = []
    seen_question_ids: set[str] = set()
    now_utc = datetime.now(timezone.utc)

    for path in _csv_files(input_path):
        rows = _read_csv(path)
        summary.total_rows_read += len(rows)
        for row_index, row in enumerate(rows, start=2):
            source_status = _norm(row.get("status", "active"))
            if source_status not in {"", "ready", "active"}:
                summary.skipped_not_ready += 1
                continue

            question_id = (row.get("question_id") or "").strip()
            if not question_id:
                raise ValueError(f"{path.name}:{row_index}: empty question_id")
            if len(question_id) > MAX_QUESTION_ID_LENGTH:
                raise ValueError(f"{path.name}:{row_index}: question_id exceeds 64 characters")
            if question_id in seen_question_ids:
                raise ValueError(
                    f"{path.name}:{row_index}: duplicate question_id in import set: {question_id}"
                )
            seen_question_ids.add(question_id)

            category = (row.get("category") or "").strip()
            if not category:
                raise ValueError(f"{path.name}:{row_index}: empty category")
            if len(category) > MAX_CATEGORY_LENGTH:
                raise ValueError(f"{path.name}:{row_index}: category exceeds 64 characters")

            question_text = (row.get("question") or "").strip()
            if not question_text:
                raise ValueError(f"{path.name}:{row_index}: empty question")
            correct_answer = (row.get("correct_answer") or "").strip()
            if not correct_answer:
                raise ValueError(f"{path.name}:{row_index}: empty correct_answer")

            distractors = [(row.get(column) or "").strip() or None for column in DISTRACTOR_COLUMNS]
            if any(value is not None and _norm(value) == _norm(correct_answer) for value in distractors):
                raise ValueError(f"{path.name}:{row_index}: distractor repeats the correct answer")

            records.append(
                {
                    "question_id": question_id,
                    "category": category,
                    "question_text": question_text,
                    "correct_answer": correct_answer,
                    "distractor_1": distractors[0],
                    "distractor_2": distractors[1],
                    "distractor_3": distractors[2],
                    "status": "ACTIVE",
                    "created_at": now_utc,
                    "updated_at": now_utc,
                }
            )
            by_category[category] += 1

    summary.total_rows_imported = len(records)
    return records, summary, by_category


def _chunks(rows: list[dict[str, Any]], size: int) -> list[list[dict[str, Any]]]:
    return [rows[index : index + size] for index in range(0, len(rows), size)]


async def _persist_records(records: list[dict[str, Any]], *, replace_all: bool) -> None:
    if not records:
        raise ValueError("no importable rows found")

    async with SessionLocal.begin() as session:
        if replace_all:
            await session.execute(delete(Question))

        for chunk in _chunks(records, 500):
            stmt = insert_for(session, Question).values(chunk)
            stmt = stmt.on_conflict_do_update(
                index_elements=[Question.question_id],
                set_={
                    "category": stmt.excluded.category,
                    "question_text": stmt.excluded.question_text,
                    "correct_answer": stmt.excluded.correct_answer,
                    "distractor_1": stmt.excluded.distractor_1,
                    "distractor_2": stmt.excluded.distractor_2,
                    "distractor_3": stmt.excluded.distractor_3,
                    "status": stmt.excluded.status,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            await session.execute(stmt)


async def _run() -> int:
    args = _parse_args()
    settings = get_settings()
    _validate_replace_all_safety(
        app_env=settings.app_env,
        database_url=settings.database_url,
        replace_all=args.replace_all,
        confirmation_value=os.getenv(REPLACE_ALL_CONFIRMATION_ENV, ""),
        expected_db_name=args.expected_db_name,
    )
    records, summary, by_category = _build_records(args.input)

    if not args.dry_run:
        await _persist_records(records, replace_all=args.replace_all)

    category_stats = ", ".join(f"{name}={count}" for name, count in sorted(by_category.items()))
    print(  # noqa: T201
        "questionbank_import "
        f"rows_read={summary.total_rows_read} "
        f"rows_imported={summary.total_rows_imported} "
        f"skipped_not_ready={summary.skipped_not_ready} "
        f"replace_all={args.replace_all} "
        f"dry_run={args.dry_run}"
    )
    print(f"questionbank_import_by_category {category_stats}")  # noqa: T201
    return 0


def main() -> int:
    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
