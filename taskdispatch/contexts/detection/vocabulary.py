"""
Detection vocabulary loading.

Overlays an optional YAML file on the packaged default phrase tables and freezes
the result into a DetectionVocabulary. Lists in the override replace the default
list for that key; keys left out keep their defaults.

Example override (vocabulary.yaml):

    task_verbs: [ship, draft, triage]
    priority_indicators:
      high: [urgent, blocker, p0]
"""

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

from taskdispatch.contexts.detection.exceptions import VocabularyConfigError
from taskdispatch.contexts.detection.patterns import (
    DEFAULT_VOCABULARY,
    PRIORITY_LEVELS,
    DetectionVocabulary,
)

load_dotenv()

VOCABULARY_PATH_ENV = "TASKDISPATCH_VOCABULARY_PATH"

_LIST_KEYS = (
    "imperative_phrases",
    "task_verbs",
    "request_patterns",
    "delegation_phrases",
    "deadline_keywords",
)


def load_vocabulary(config_path: Optional[Path] = None) -> DetectionVocabulary:
    """
    Load the detection vocabulary, applying a YAML override if one is configured.

    Args:
        config_path: Optional override file (defaults to $TASKDISPATCH_VOCABULARY_PATH;
            when neither is set the packaged defaults are returned)

    Returns:
        Frozen DetectionVocabulary

    Raises:
        VocabularyConfigError: If the file is missing, not a mapping, or has
            unknown keys or non-string entries
    """
    if config_path is None:
        env_path = os.getenv(VOCABULARY_PATH_ENV)
        if not env_path:
            return DEFAULT_VOCABULARY
        config_path = Path(env_path)

    config_path = Path(config_path)
    if not config_path.is_file():
        raise VocabularyConfigError("Vocabulary file not found", config_path=config_path)

    override = OmegaConf.load(config_path)
    if not isinstance(override, DictConfig):
        raise VocabularyConfigError(
            "Vocabulary file must contain a mapping at the top level", config_path=config_path
        )

    return vocabulary_from_dict(
        OmegaConf.to_container(override, resolve=True), config_path=config_path
    )


def vocabulary_from_dict(
    data: dict[str, Any],
    base: DetectionVocabulary = DEFAULT_VOCABULARY,
    config_path: Optional[Path] = None,
) -> DetectionVocabulary:
    """
    Merge a plain override dict onto ``base`` and build a frozen vocabulary.

    Args:
        data: Override mapping (same shape as DetectionVocabulary.to_dict())
        base: Vocabulary supplying defaults for keys not in ``data``
        config_path: Source file, only used in error messages

    Returns:
        Frozen DetectionVocabulary
    """
    known = set(_LIST_KEYS) | {"priority_indicators"}
    unknown = sorted(set(data) - known)
    if unknown:
        raise VocabularyConfigError(
            f"Unknown vocabulary keys: {', '.join(unknown)}",
            config_path=config_path,
            key=unknown[0],
        )

    # Shape checks before merging so OmegaConf never sees a list/scalar swap
    for key in _LIST_KEYS:
        if data.get(key) is not None and not isinstance(data[key], (list, tuple)):
            raise VocabularyConfigError("Expected a list of phrases", config_path=config_path, key=key)
    if data.get("priority_indicators") is not None and not isinstance(
        data["priority_indicators"], dict
    ):
        raise VocabularyConfigError(
            "Expected a mapping of priority level to phrases",
            config_path=config_path,
            key="priority_indicators",
        )
    for level, phrases in (data.get("priority_indicators") or {}).items():
        if phrases is not None and not isinstance(phrases, (list, tuple)):
            raise VocabularyConfigError(
                "Expected a list of phrases",
                config_path=config_path,
                key=f"priority_indicators.{level}",
            )

    merged = OmegaConf.to_container(
        OmegaConf.merge(OmegaConf.create(base.to_dict()), OmegaConf.create(data)),
        resolve=True,
    )

    fields = {key: _as_phrases(merged[key], key, config_path) for key in _LIST_KEYS}

    levels = merged["priority_indicators"] or {}
    bad_levels = sorted(set(levels) - set(PRIORITY_LEVELS))
    if bad_levels:
        raise VocabularyConfigError(
            f"Unknown priority levels: {', '.join(bad_levels)} "
            f"(expected {', '.join(PRIORITY_LEVELS)})",
            config_path=config_path,
            key="priority_indicators",
        )

    # Level order is fixed regardless of YAML key order
    fields["priority_indicators"] = tuple(
        (level, _as_phrases(levels.get(level), f"priority_indicators.{level}", config_path))
        for level in PRIORITY_LEVELS
    )

    return DetectionVocabulary(**fields)


def _as_phrases(value: Any, key: str, config_path: Optional[Path]) -> tuple[str, ...]:
    """Validate a phrase list and normalize it to a lowercase tuple."""
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise VocabularyConfigError("Expected a list of phrases", config_path=config_path, key=key)

    phrases = []
    for item in value:
        if not isinstance(item, str):
            raise VocabularyConfigError(
                f"Expected string phrases, got {type(item).__name__}",
                config_path=config_path,
                key=key,
            )
        phrase = item.strip().lower()
        if phrase and phrase not in phrases:
            phrases.append(phrase)
    return tuple(phrases)
