"""
ArticleLens Content Extraction Module

Picks the primary readable region of a rendered page:
1. Boilerplate (navigation, chrome, ads, comments, popups) is hidden in place
2. Every match of an ordered list of content selectors is scored by word count
3. Naming-convention boosts are folded over the score
4. The best region above a word floor wins, else the whole body is used
"""

from .content_extractor import BoostRule, ContentExtractor, default_boost_rules, score_candidate
from .models import CandidateRegion, ExtractionResult
from .protocols import Extractor
from .visibility import hide, is_hidden, visible_text

__all__ = [
    "BoostRule",
    "CandidateRegion",
    "ContentExtractor",
    "ExtractionResult",
    "Extractor",
    "default_boost_rules",
    "hide",
    "is_hidden",
    "score_candidate",
    "visible_text",
]
