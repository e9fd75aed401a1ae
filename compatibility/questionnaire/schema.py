"""
Questionnaire configuration schema.

Defines the static data the scoring engine depends on:
- Questions: id, prompt and the closed set of valid answers
- Question weights: used only by the simple (exact-match) scorer
- Categories: weighted groups of questions with an inclusion threshold
- Similarity table: partial credit for specific non-identical answer pairs

A QuestionnaireConfig is validated when it is constructed. Structural
problems that would make scores meaningless (empty categories, references
to unknown questions, non-positive weights) raise ConfigurationError.
Softer problems (one-directional similarity pairs, pairs naming answers a
question does not offer) are reported by find_issues() and left to the
caller to log.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Any, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# Ordered similarity keys join two answers with this separator: "Texting-VideoChat"
PAIR_SEPARATOR = "-"


class ConfigurationError(ValueError):
    """Raised when questionnaire configuration is malformed."""


def make_pair_key(answer_a: str, answer_b: str) -> str:
    """Build the ordered similarity-table key for two answers."""
    return f"{answer_a}{PAIR_SEPARATOR}{answer_b}"


def split_pair_key(key: str, options: Tuple[str, ...]) -> Optional[Tuple[str, str]]:
    """
    Split an ordered pair key back into its two answers.

    Answers may themselves contain the separator, so every split position
    is tried and the first one where both halves are valid options wins.

    Returns:
        (answer_a, answer_b), or None if no split yields two known options
    """
    start = 0
    while True:
        idx = key.find(PAIR_SEPARATOR, start)
        if idx < 0:
            return None
        left, right = key[:idx], key[idx + len(PAIR_SEPARATOR):]
        if left in options and right in options:
            return left, right
        start = idx + 1


@dataclass(frozen=True)
class Question:
    """
    A single questionnaire item.

    Attributes:
        id: Question identifier (stable across releases)
        prompt: Text shown to the user
        options: Valid answers, in display order
    """
    id: int
    prompt: str
    options: Tuple[str, ...]

    def is_valid_answer(self, value: Any) -> bool:
        return value in self.options

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "question": self.prompt, "options": list(self.options)}


@dataclass(frozen=True)
class Category:
    """
    Weighted group of questions.

    Attributes:
        name: Category key, e.g. "CORE_VALUES"
        weight: Weight of the category average in the final score
        questions: Member question ids, in declaration order
        threshold: Minimum category average for the category to count
        description: Human-readable label for display
    """
    name: str
    weight: float
    questions: Tuple[int, ...]
    threshold: float
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "weight": self.weight,
            "questions": list(self.questions),
            "threshold": self.threshold,
            "description": self.description
        }


@dataclass(frozen=True)
class QuestionnaireConfig:
    """
    Immutable questionnaire configuration consumed by the scoring engine.

    Build one with from_dict() (YAML/JSON shaped data) or directly from
    Question/Category objects. Mappings are wrapped read-only on
    construction so a shared config can be used from any number of callers.

    Attributes:
        questions: Questions in registry order
        question_weights: Question id -> weight for the simple scorer
        categories: Categories in declaration order (governs result ordering)
        similarities: Question id -> {"A-B": similarity}
    """
    questions: Tuple[Question, ...]
    question_weights: Mapping[int, float] = field(default_factory=dict)
    categories: Tuple[Category, ...] = ()
    similarities: Mapping[int, Mapping[str, float]] = field(default_factory=dict)

    def __post_init__(self):
        """Freeze containers and validate."""
        object.__setattr__(self, "questions", tuple(self.questions))
        object.__setattr__(self, "categories", tuple(self.categories))
        object.__setattr__(
            self, "question_weights",
            MappingProxyType({int(k): float(v) for k, v in self.question_weights.items()})
        )
        object.__setattr__(
            self, "similarities",
            MappingProxyType({
                int(qid): MappingProxyType({str(k): float(v) for k, v in pairs.items()})
                for qid, pairs in self.similarities.items()
            })
        )
        object.__setattr__(self, "_questions_by_id", {q.id: q for q in self.questions})
        self.validate()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def question_ids(self) -> List[int]:
        return [q.id for q in self.questions]

    def get_question(self, question_id: int) -> Optional[Question]:
        return self._questions_by_id.get(question_id)

    def get_category(self, name: str) -> Optional[Category]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def question_weight(self, question_id: int) -> float:
        """Weight used by the simple scorer; questions without one weigh 1.0."""
        weight = self.question_weights.get(question_id)
        if weight is None:
            return 1.0
        return weight

    def lookup_similarity(
        self,
        question_id: int,
        answer_a: str,
        answer_b: str
    ) -> Optional[float]:
        """
        Look up the curated similarity for an ordered answer pair.

        Returns:
            The table value, or None when the question has no table or the
            ordered pair is not listed
        """
        table = self.similarities.get(question_id)
        if table is None:
            return None
        return table.get(make_pair_key(answer_a, answer_b))

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """
        Check structural integrity.

        Similarity table values must lie strictly between 0 and 1: 1.0 is
        reserved for identical answers and 0 is what an unlisted pair scores.

        Raises:
            ConfigurationError: On the first structural problem found
        """
        if not self.questions:
            raise ConfigurationError("Questionnaire must define at least one question")

        seen = set()
        for question in self.questions:
            if question.id in seen:
                raise ConfigurationError(f"Duplicate question id: {question.id}")
            seen.add(question.id)
            if not question.options:
                raise ConfigurationError(f"Question {question.id} has no answer options")

        for qid, weight in self.question_weights.items():
            if qid not in seen:
                raise ConfigurationError(f"Weight given for unknown question id: {qid}")
            if weight <= 0:
                raise ConfigurationError(
                    f"Question {qid} weight must be positive, got {weight}"
                )

        category_names = set()
        for category in self.categories:
            if category.name in category_names:
                raise ConfigurationError(f"Duplicate category name: {category.name}")
            category_names.add(category.name)
            if not category.questions:
                raise ConfigurationError(
                    f"Category {category.name} has no questions; its average would be undefined"
                )
            unknown = [qid for qid in category.questions if qid not in seen]
            if unknown:
                raise ConfigurationError(
                    f"Category {category.name} references unknown question ids: {unknown}"
                )
            if category.weight <= 0:
                raise ConfigurationError(
                    f"Category {category.name} weight must be positive, got {category.weight}"
                )
            if not 0 <= category.threshold <= 1:
                raise ConfigurationError(
                    f"Category {category.name} threshold must be in [0, 1], "
                    f"got {category.threshold}"
                )

        for qid, pairs in self.similarities.items():
            if qid not in seen:
                raise ConfigurationError(
                    f"Similarity table given for unknown question id: {qid}"
                )
            for key, value in pairs.items():
                if not 0 < value < 1:
                    raise ConfigurationError(
                        f"Similarity for question {qid} pair '{key}' must be in (0, 1), "
                        f"got {value}"
                    )

    def find_asymmetric_pairs(self) -> List[Tuple[int, str]]:
        """
        Find similarity entries whose reverse pair is missing or different.

        Scores are only symmetric when every "A-B" entry has a matching
        "B-A" entry.
        """
        asymmetric = []
        for qid, pairs in self.similarities.items():
            question = self._questions_by_id[qid]
            for key, value in pairs.items():
                split = split_pair_key(key, question.options)
                if split is None:
                    # Unknown answers are reported separately by find_issues
                    continue
                reverse = make_pair_key(split[1], split[0])
                if pairs.get(reverse) != value:
                    asymmetric.append((qid, key))
        return asymmetric

    def find_issues(self) -> List[str]:
        """
        Report non-fatal configuration issues.

        Returns:
            List of warning messages (empty if none)
        """
        issues = []

        for category in self.categories:
            if len(set(category.questions)) != len(category.questions):
                issues.append(
                    f"Category {category.name} lists a question more than once"
                )

        for qid, pairs in self.similarities.items():
            question = self._questions_by_id[qid]
            for key in pairs:
                if split_pair_key(key, question.options) is None:
                    issues.append(
                        f"Similarity pair '{key}' for question {qid} does not name "
                        f"two valid answers; it can never apply"
                    )

        for qid, key in self.find_asymmetric_pairs():
            issues.append(
                f"Similarity pair '{key}' for question {qid} has no matching reverse entry"
            )

        return issues

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary layout accepted by from_dict()."""
        return {
            "questions": [q.to_dict() for q in self.questions],
            "question_weights": dict(self.question_weights),
            "categories": [c.to_dict() for c in self.categories],
            "similarities": {qid: dict(pairs) for qid, pairs in self.similarities.items()}
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuestionnaireConfig":
        """
        Create from a dictionary (typically parsed YAML).

        Expected layout:
            questions: [{id, question, options}, ...]
            question_weights: {id: weight}            # optional
            categories: [{name, weight, questions, threshold, description}, ...]
                or {NAME: {weight, questions, threshold, description}}
            similarities: {id: {"A-B": value}}        # optional

        A list keeps category order through serializers that sort mapping
        keys; to_dict() always writes the list form.

        Raises:
            ConfigurationError: If required sections are missing or malformed
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Questionnaire configuration must be a mapping, got {type(data).__name__}"
            )

        raw_questions = data.get("questions")
        if not isinstance(raw_questions, list):
            raise ConfigurationError("Missing required section: questions (a list)")

        questions = []
        for raw in raw_questions:
            try:
                questions.append(Question(
                    id=int(raw["id"]),
                    prompt=str(raw.get("question", raw.get("prompt", ""))),
                    options=tuple(str(option) for option in raw["options"])
                ))
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid question entry {raw!r}: {e}") from e

        raw_categories = data.get("categories") or {}
        if isinstance(raw_categories, dict):
            category_entries = list(raw_categories.items())
        elif isinstance(raw_categories, list):
            category_entries = [
                (raw.get("name") if isinstance(raw, dict) else None, raw)
                for raw in raw_categories
            ]
        else:
            raise ConfigurationError(
                "categories must be a list of settings or a mapping of name -> settings"
            )

        categories = []
        for name, raw in category_entries:
            try:
                if name is None:
                    raise KeyError("name")
                categories.append(Category(
                    name=str(name),
                    weight=float(raw["weight"]),
                    questions=tuple(int(qid) for qid in raw.get("questions") or []),
                    threshold=float(raw["threshold"]),
                    description=str(raw.get("description", ""))
                ))
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid category {name}: {e}") from e

        try:
            weights = {int(k): float(v) for k, v in (data.get("question_weights") or {}).items()}
            similarities = {
                int(qid): {str(k): float(v) for k, v in pairs.items()}
                for qid, pairs in (data.get("similarities") or {}).items()
            }
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid weights or similarity table: {e}") from e

        return cls(
            questions=tuple(questions),
            question_weights=weights,
            categories=tuple(categories),
            similarities=similarities
        )
