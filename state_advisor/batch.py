# state_advisor/batch.py
from __future__ import annotations

"""
Batch scoring of many answer sets without starting FastAPI.

Input: CSV (or XLSX) with one column per question id and an optional ``id``
column. Blank cells are treated as unanswered.
Output: long CSV with exact header
    row_id,rank,candidate_id,name,score,raw_score
"""

from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from loguru import logger

from ._singletons import get_validated_rules
from .catalog import CATALOG
from .engine import is_complete, recommend
from .questions import QUESTIONS, question_ids

OUTPUT_COLUMNS = ["row_id", "rank", "candidate_id", "name", "score", "raw_score"]


def read_answer_sets(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    ext = path.suffix.lower()
    if ext in [".xlsx", ".xls"]:
        df = pd.read_excel(path, dtype=str)
    else:
        df = pd.read_csv(path, dtype=str, encoding="utf-8")
    known = set(question_ids(QUESTIONS))
    if not known.intersection(df.columns):
        raise ValueError(
            f"Expected at least one question column {sorted(known)}. Found: {list(df.columns)}"
        )
    return df


def row_to_answers(row: pd.Series) -> Dict[str, str]:
    answers: Dict[str, str] = {}
    for qid in question_ids(QUESTIONS):
        if qid not in row.index:
            continue
        val = row[qid]
        if pd.isna(val):
            continue
        s = str(val).strip()
        if s:
            answers[qid] = s
    return answers


def score_frame(df: pd.DataFrame, top_n: Optional[int] = None, strict: bool = False) -> pd.DataFrame:
    rules = get_validated_rules()
    rows: List[Dict] = []
    incomplete = 0
    for idx, row in df.iterrows():
        row_id = row["id"] if "id" in df.columns and not pd.isna(row["id"]) else str(idx)
        answers = row_to_answers(row)
        if not is_complete(answers, QUESTIONS):
            incomplete += 1
        for rec in recommend(answers, top_n, strict=strict, rules=rules, catalog=CATALOG):
            rows.append(
                {
                    "row_id": row_id,
                    "rank": rec.rank,
                    "candidate_id": rec.id,
                    "name": rec.name,
                    "score": rec.score,
                    "raw_score": rec.raw_score,
                }
            )
    if incomplete:
        logger.warning("{} of {} answer sets leave questions unanswered", incomplete, len(df))
    logger.info("Scored {} answer sets -> {} result rows", len(df), len(rows))
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS)


def run_batch(input_path: Path, output_path: Path, top_n: Optional[int] = None, strict: bool = False) -> pd.DataFrame:
    df = read_answer_sets(input_path)
    out = score_frame(df, top_n=top_n, strict=strict)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    out.to_csv(output_path, index=False, encoding="utf-8")
    logger.info("Wrote batch results to {}", output_path)
    return out
