# state_advisor/_singletons.py
from functools import lru_cache

from loguru import logger

from . import config
from .catalog import CATALOG
from .questions import QUESTIONS
from .rules import SCORING_RULES, max_attainable_scores, validate_rule_table


@lru_cache(maxsize=1)
def get_validated_rules():
    # raises ConfigurationError once, at first use (startup)
    validate_rule_table(SCORING_RULES, CATALOG, QUESTIONS)
    best = max_attainable_scores(SCORING_RULES, CATALOG)
    top_id = max(best, key=best.get)
    if best[top_id] > config.MATCH_SCORE_NORMALIZER:
        logger.warning(
            "{} can reach raw score {} > normalizer {}; match percentages will clamp at {}",
            top_id,
            best[top_id],
            config.MATCH_SCORE_NORMALIZER,
            config.MATCH_SCORE_MAX,
        )
    return SCORING_RULES
