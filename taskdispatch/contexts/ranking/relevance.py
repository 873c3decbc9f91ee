"""
Per-call skill relevance map.

Relevance is an integer weight per catalog skill saying how strongly the task
calls for it. The map is built once per ranking call and shared by every
candidate.

Passes, each keeping the highest value seen for a skill:
1. Required skill named explicitly (case-insensitive catalog match): 10
2. Catalog skill name appears verbatim in the task text: 8
3. Keyword overlap between the skill's name+description and the task words: 2 per hit
4. Only if nothing above matched, a loose pass: a skill name containing, or
   contained in, some task word: 3

The loose pass can pair unrelated words ("test" inside "contest"); that is
accepted as a known weakness of the fallback.
"""

from dataclasses import dataclass, field
from typing import Iterable

from taskdispatch.contexts.ranking.models import Skill
from taskdispatch.utils.token_processing import Tokenizer

REQUIRED_SKILL_RELEVANCE = 10
NAME_IN_TEXT_RELEVANCE = 8
KEYWORD_HIT_RELEVANCE = 2
LOOSE_MATCH_RELEVANCE = 3

# Task words must be longer than this
MIN_WORD_LENGTH = 4

TASK_STOPWORDS = frozenset({"this", "that", "with", "from", "have", "will"})

TASK_WORD_TOKENIZER = Tokenizer(custom_stopwords=TASK_STOPWORDS, min_token_length=MIN_WORD_LENGTH)
SKILL_KEYWORD_TOKENIZER = Tokenizer(min_token_length=MIN_WORD_LENGTH)


@dataclass(frozen=True)
class RelevanceMap:
    """skill_id -> relevance, in catalog order, with the names needed for reasons."""

    weights: dict[str, int] = field(default_factory=dict)
    skill_names: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.weights.values())

    def is_empty(self) -> bool:
        return not self.weights

    def items(self):
        return self.weights.items()

    def name_of(self, skill_id: str) -> str:
        return self.skill_names.get(skill_id, skill_id)


def extract_task_words(task_text: str) -> list[str]:
    """
    Lowercase words of the task longer than three characters, minus stop-words.

    Example:
        >>> extract_task_words("Fix this login bug with the API")
        ['login']
    """
    return TASK_WORD_TOKENIZER.tokenize(task_text or "")


def build_relevance_map(
    task_text: str,
    required_skills: Iterable[str],
    skill_catalog: Iterable[Skill],
) -> RelevanceMap:
    """
    Compute the relevance map for one ranking call.

    Args:
        task_text: Detected task description
        required_skills: Skill names called out by detection (unknown names ignored)
        skill_catalog: All known skills

    Returns:
        RelevanceMap (empty when nothing in the catalog is relevant)
    """
    catalog = [skill for skill in skill_catalog if skill.name and skill.name.strip()]
    text_lower = (task_text or "").lower()
    task_words = extract_task_words(task_text)
    task_word_set = set(task_words)
    required = {name.strip().lower() for name in required_skills or () if name and name.strip()}

    weights: dict[str, int] = {}

    def keep_max(skill_id: str, value: int) -> None:
        if value > weights.get(skill_id, 0):
            weights[skill_id] = value

    for skill in catalog:
        name = skill.name.strip().lower()

        if name in required:
            keep_max(skill.id, REQUIRED_SKILL_RELEVANCE)

        if name in text_lower:
            keep_max(skill.id, NAME_IN_TEXT_RELEVANCE)

        keywords = SKILL_KEYWORD_TOKENIZER.tokenize(f"{skill.name} {skill.description or ''}")
        hits = sum(1 for keyword in keywords if keyword in task_word_set)
        if hits:
            keep_max(skill.id, hits * KEYWORD_HIT_RELEVANCE)

    if not weights:
        for skill in catalog:
            name = skill.name.strip().lower()
            if any(name in word or word in name for word in task_words):
                weights[skill.id] = LOOSE_MATCH_RELEVANCE

    # Preserve catalog order for reason text
    ordered = {skill.id: weights[skill.id] for skill in catalog if skill.id in weights}
    return RelevanceMap(
        weights=ordered,
        skill_names={skill.id: skill.name for skill in catalog if skill.id in ordered},
    )
