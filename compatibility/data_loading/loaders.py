"""
Data loading functions for compatibility scoring.

This module handles loading questionnaire definitions from YAML, single
answer sets from YAML/JSON, and candidate pools from CSV.
No scoring is done here - that's handled by the scoring module.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import pandas as pd
import yaml

from ..questionnaire.answers import AnswerSet, normalize_answers
from ..questionnaire.schema import QuestionnaireConfig

logger = logging.getLogger(__name__)

USER_ID_COLUMN = "user_id"


def load_questionnaire(filepath: str) -> QuestionnaireConfig:
    """
    Load a questionnaire definition from YAML.

    The file uses the layout of QuestionnaireConfig.from_dict:
        questions: [{id, question, options}, ...]
        question_weights: {id: weight}
        categories: [{name, weight, questions, threshold, description}, ...]
            (or a {NAME: {...}} mapping; the list form keeps order when sorted)
        similarities: {id: {"A-B": value}}

    Args:
        filepath: Path to the questionnaire YAML file

    Returns:
        Validated QuestionnaireConfig

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty
        ConfigurationError: If the questionnaire is malformed
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Questionnaire file not found: {filepath}")

    logger.info(f"Loading questionnaire from {filepath}")
    with open(filepath, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise ValueError(f"Questionnaire file is empty: {filepath}")

    config = QuestionnaireConfig.from_dict(data)
    for issue in config.find_issues():
        logger.warning(f"Questionnaire issue: {issue}")

    logger.info(
        f"Loaded {len(config.questions)} questions in {len(config.categories)} categories"
    )
    return config


def load_answer_set(filepath: str) -> AnswerSet:
    """
    Load one user's answers from a YAML or JSON file.

    Accepts either a flat mapping ({4: "Exercise", ...}) or a profile-shaped
    mapping with an "answers" key ({user_id: ..., answers: {...}}).

    Args:
        filepath: Path to the answers file

    Returns:
        Normalized AnswerSet

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a mapping
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Answers file not found: {filepath}")

    # YAML is a superset of JSON, so one parser covers both
    with open(filepath, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise ValueError(f"Answers file is empty: {filepath}")
    if not isinstance(data, dict):
        raise ValueError(f"Answers file must contain a mapping: {filepath}")

    raw = data.get("answers", data)
    if not isinstance(raw, dict):
        raise ValueError(f"'answers' must be a mapping in {filepath}")

    answers = normalize_answers(raw)
    logger.info(f"Loaded {len(answers)} answers from {filepath}")
    return answers


def load_candidate_pool(filepath: str, delimiter: str = ",") -> Dict[str, AnswerSet]:
    """
    Load a pool of candidates' answers from CSV.

    The CSV should contain:
    - A user_id column
    - One column per question, named by question id ("1", "2", ...)
    - Each row represents one candidate; blank cells are unanswered

    Args:
        filepath: Path to the CSV file
        delimiter: Field delimiter (default: comma)

    Returns:
        Dictionary of user_id -> AnswerSet, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or has no user_id column
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Candidate pool file not found: {filepath}")

    logger.info(f"Loading candidate pool from {filepath} (delimiter: {repr(delimiter)})")
    df = pd.read_csv(filepath, sep=delimiter, dtype=str, keep_default_na=False)

    if df.empty:
        raise ValueError(f"Candidate pool file is empty: {filepath}")
    if USER_ID_COLUMN not in df.columns:
        raise ValueError(f"Candidate pool file has no '{USER_ID_COLUMN}' column: {filepath}")

    question_columns = get_question_columns(df)
    ignored = [c for c in df.columns if c != USER_ID_COLUMN and c not in question_columns]
    if ignored:
        logger.warning(f"Ignoring non-question columns: {ignored}")

    pool: Dict[str, AnswerSet] = {}
    for record in df.to_dict(orient="records"):
        user_id = str(record[USER_ID_COLUMN])
        if user_id in pool:
            logger.warning(f"Duplicate user_id {user_id!r}; keeping the last row")
        pool[user_id] = normalize_answers({col: record[col] for col in question_columns})

    logger.info(f"Loaded {len(pool)} candidates with {len(question_columns)} question columns")
    return pool


def get_question_columns(df: pd.DataFrame) -> List[str]:
    """
    Extract question-id column names from a candidate pool DataFrame.

    Returns:
        Column names that parse as integers, in file order
    """
    columns = []
    for column in df.columns:
        try:
            int(column)
        except (TypeError, ValueError):
            continue
        columns.append(column)
    return columns
