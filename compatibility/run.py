"""
Command-line entrypoint for compatibility scoring.

Usage:
    python -m compatibility.run --answers me.yaml --other them.yaml
    python -m compatibility.run --answers me.yaml --pool candidates.csv --report report.json

Pair mode prints the compatibility result as JSON. Pool mode ranks every
candidate in the CSV, prints the matches that clear matching.min_score and
optionally writes an evaluation report for the whole pool.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/config.yaml"


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def _load_settings(config_path: Optional[str]) -> Dict[str, Any]:
    """Load and check the YAML settings; a missing default file means defaults."""
    from .configs import load_config, validate_config

    if config_path is None:
        if not Path(DEFAULT_CONFIG_PATH).exists():
            logger.info(f"No {DEFAULT_CONFIG_PATH} found; using built-in defaults")
            return {}
        config_path = DEFAULT_CONFIG_PATH

    config = load_config(config_path)
    for issue in validate_config(config):
        logger.warning(f"Config issue: {issue}")
    return config


def run_scoring(
    answers_path: str,
    other_path: Optional[str] = None,
    pool_path: Optional[str] = None,
    config_path: Optional[str] = None,
    questionnaire_path: Optional[str] = None,
    min_score: Optional[float] = None,
    top_k: Optional[int] = None,
    simple: bool = False,
    report_path: Optional[str] = None
) -> Dict[str, Any]:
    """
    Score one answer set against another answer set or a candidate pool.

    Args:
        answers_path: YAML/JSON answers of the viewing user
        other_path: YAML/JSON answers of a single other user (pair mode)
        pool_path: CSV of candidate answers (pool mode)
        config_path: Settings YAML (default: configs/config.yaml if present)
        questionnaire_path: Questionnaire YAML overriding the reference one
        min_score: Overrides matching.min_score
        top_k: Overrides matching.top_k
        simple: Pair mode only; also report the exact-match score
        report_path: Pool mode only; write an evaluation report here

    Returns:
        Dictionary with the pair result, or the ranked matches
    """
    # Import modules here to keep `--help` fast
    from .configs import get_config_value
    from .data_loading import load_questionnaire, load_answer_set, load_candidate_pool
    from .questionnaire import reference_config, validate_answers
    from .scoring import create_engine
    from .ranking import CandidateRanker, DEFAULT_MIN_SCORE
    from .evaluation import create_evaluation_report

    if (other_path is None) == (pool_path is None):
        raise ValueError("Provide exactly one of other_path or pool_path")

    config = _load_settings(config_path)
    setup_logging(str(get_config_value(config, "global.log_level", "INFO")))

    questionnaire_path = questionnaire_path or get_config_value(config, "questionnaire.path")
    if questionnaire_path:
        questionnaire = load_questionnaire(questionnaire_path)
    else:
        questionnaire = reference_config()

    engine = create_engine(questionnaire)
    answers = load_answer_set(answers_path)
    for issue in validate_answers(questionnaire, answers):
        logger.warning(f"Answer issue ({answers_path}): {issue}")

    if other_path is not None:
        other = load_answer_set(other_path)
        for issue in validate_answers(questionnaire, other):
            logger.warning(f"Answer issue ({other_path}): {issue}")

        result = engine.calculate_compatibility(answers, other)
        output = {"mode": "pair", "result": result.to_dict()}
        if simple:
            output["simple_score"] = engine.calculate_simple_compatibility(answers, other)
        return output

    if min_score is None:
        min_score = get_config_value(config, "matching.min_score", DEFAULT_MIN_SCORE)
    if top_k is None:
        top_k = get_config_value(config, "matching.top_k")

    pool = load_candidate_pool(pool_path)
    ranker = CandidateRanker(engine, min_score=float(min_score), top_k=top_k)
    ranked = ranker.rank(answers, pool)

    if report_path:
        quantiles = get_config_value(config, "evaluation.quantiles", [0.1, 0.25, 0.5, 0.75, 0.9])
        report = create_evaluation_report(ranker.score_pool(answers, pool), quantiles=quantiles)
        report.save(report_path)
        logger.info("\n" + report.summary())

    return {
        "mode": "pool",
        "pool_size": len(pool),
        "min_score": ranker.min_score,
        "matches": [candidate.to_dict() for candidate in ranked],
        "table": ranker.to_frame(ranked)
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Score dating compatibility between questionnaire answer sets"
    )
    parser.add_argument(
        "--answers",
        type=str,
        required=True,
        help="YAML/JSON file with the viewing user's answers"
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--other",
        type=str,
        help="YAML/JSON file with another user's answers"
    )
    target.add_argument(
        "--pool",
        type=str,
        help="CSV of candidate answers (user_id column plus one column per question id)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH} if present)"
    )
    parser.add_argument(
        "--questionnaire",
        type=str,
        default=None,
        help="Questionnaire YAML to use instead of the reference questionnaire"
    )
    parser.add_argument(
        "--min-score",
        type=float,
        default=None,
        help="Minimum compatibility for pool matches (overrides config)"
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Show at most this many pool matches (overrides config)"
    )
    parser.add_argument(
        "--simple",
        action="store_true",
        help="Also print the exact-match compatibility score (pair mode)"
    )
    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Write a pool evaluation report to this JSON file (pool mode)"
    )

    args = parser.parse_args(argv)

    try:
        output = run_scoring(
            args.answers,
            other_path=args.other,
            pool_path=args.pool,
            config_path=args.config,
            questionnaire_path=args.questionnaire,
            min_score=args.min_score,
            top_k=args.top_k,
            simple=args.simple,
            report_path=args.report
        )
    except Exception as e:
        logger.exception(f"Scoring failed with error: {e}")
        return 1

    if output["mode"] == "pair":
        print(json.dumps(output["result"], indent=2))
        if "simple_score" in output:
            print(f"Simple compatibility: {output['simple_score']:.4f}")
    else:
        table = output["table"]
        if table.empty:
            print(f"No candidates at or above {output['min_score']:.2f} "
                  f"(pool size {output['pool_size']})")
        else:
            print(table.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
