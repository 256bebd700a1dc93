# state_advisor/cli.py
"""
Command-line front end for the advisor.

  questions   list the questionnaire
  solutions   list the catalog
  recommend   score one answer set given as --answer key=value pairs
  quiz        answer the questionnaire interactively
  batch       score a CSV of answer sets into a CSV of ranked results
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from ._singletons import get_validated_rules
from .batch import run_batch
from .catalog import CATALOG
from .config import Recommendation
from .engine import recommend, score_answers
from .errors import AdvisorError, AnswerValidationError
from .flow import QuestionFlow
from .logging_setup import configure_logging
from .questions import QUESTIONS


def parse_answer_pairs(pairs: Sequence[str]) -> Dict[str, str]:
    answers: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip() or not value.strip():
            raise ValueError(f"Expected key=value, got {pair!r}")
        answers[key.strip()] = value.strip()
    return answers


def format_recommendation(rec: Recommendation) -> str:
    best_for = ", ".join(rec.best_for[:2])
    if len(rec.best_for) > 2:
        best_for += "..."
    lines = [
        f"{rec.rank}. {rec.name}  [{rec.score}% match]",
        f"   {rec.description}",
        f"   {rec.difficulty} to learn | {rec.performance} performance | {rec.learning_curve} learning curve",
        f"   Best for: {best_for}",
        f"   Install: {rec.installation}",
    ]
    return "\n".join(lines)


def _print_recommendations(recs: List[Recommendation], as_json: bool) -> None:
    if as_json:
        print(json.dumps([r.model_dump() for r in recs], indent=2, ensure_ascii=False))
        return
    print("Your recommendations:\n")
    for rec in recs:
        print(format_recommendation(rec))
        print()


# ---------- subcommands ----------

def cmd_questions(args: argparse.Namespace) -> int:
    for i, q in enumerate(QUESTIONS, start=1):
        print(f"{i}. [{q.id}] {q.prompt}")
        for opt in q.options:
            print(f"     {opt.emoji} {opt.value:<14} {opt.label}")
    return 0


def cmd_solutions(args: argparse.Namespace) -> int:
    for cand in CATALOG.values():
        print(f"{cand.id:<14} {cand.name}")
        print(f"{'':<14} {cand.description}")
    return 0


def cmd_recommend(args: argparse.Namespace) -> int:
    answers = parse_answer_pairs(args.answer or [])
    rules = get_validated_rules()
    recs = recommend(answers, args.top_n, strict=args.strict, rules=rules, catalog=CATALOG)
    if args.explain and not args.json:
        scores = score_answers(answers, rules=rules, catalog=CATALOG)
        print("Raw scores:")
        for cid, score in scores.items():
            print(f"  {cid:<14} {score}")
        print()
    _print_recommendations(recs, args.json)
    return 0


def cmd_quiz(args: argparse.Namespace, input_fn: Callable[[str], str] = input) -> int:
    rules = get_validated_rules()
    flow = QuestionFlow(
        QUESTIONS,
        on_complete=lambda answers: recommend(answers, args.top_n, rules=rules, catalog=CATALOG),
    )
    while not flow.is_complete():
        q = flow.current_question
        print(f"\nQuestion {flow.step + 1} of {flow.total} ({flow.progress}% complete)")
        print(q.prompt)
        for i, opt in enumerate(q.options, start=1):
            print(f"  {i}) {opt.emoji} {opt.label}")
        raw = input_fn("Choose an option (b = back, q = quit): ").strip().lower()
        if raw == "q":
            return 1
        if raw == "b":
            flow.back()
            continue
        if raw.isdigit() and 1 <= int(raw) <= len(q.options):
            value = q.options[int(raw) - 1].value
        else:
            value = raw
        try:
            flow.advance(q.id, value)
        except AnswerValidationError as e:
            print(f"  {'; '.join(e.problems)}")
    print()
    _print_recommendations(flow.recommendations, as_json=False)
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    out = run_batch(args.input, args.output, top_n=args.top_n, strict=args.strict)
    print(f"Wrote {len(out)} rows to {args.output}")
    return 0


# ---------- CLI ----------

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="state-advisor", description="Recommend a React state management library.")
    ap.add_argument("--log-level", default=None, help="loguru level (default: ADVISOR_LOG_LEVEL or INFO)")
    ap.add_argument("--no-log-file", action="store_true", help="log to stderr only")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("questions", help="list the questionnaire")
    p.set_defaults(func=cmd_questions)

    p = sub.add_parser("solutions", help="list the catalog")
    p.set_defaults(func=cmd_solutions)

    p = sub.add_parser("recommend", help="score one answer set")
    p.add_argument("--answer", "-a", action="append", metavar="QUESTION=VALUE",
                   help="one answer; repeat for each question")
    p.add_argument("--top-n", type=int, default=None)
    p.add_argument("--strict", action="store_true", help="reject missing or unknown answers")
    p.add_argument("--explain", action="store_true", help="also print the raw score table")
    p.add_argument("--json", action="store_true")
    p.set_defaults(func=cmd_recommend)

    p = sub.add_parser("quiz", help="answer the questionnaire interactively")
    p.add_argument("--top-n", type=int, default=None)
    p.set_defaults(func=cmd_quiz)

    p = sub.add_parser("batch", help="score a CSV of answer sets")
    p.add_argument("--input", type=Path, required=True, help="CSV/XLSX with one column per question id")
    p.add_argument("--output", type=Path, required=True, help="result CSV path")
    p.add_argument("--top-n", type=int, default=None)
    p.add_argument("--strict", action="store_true")
    p.set_defaults(func=cmd_batch)
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, log_file=not args.no_log_file)
    try:
        return args.func(args)
    except (AdvisorError, ValueError, FileNotFoundError) as e:
        logger.error("{}", e)
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
