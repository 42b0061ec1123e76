"""Behavioral engine: keyword and timeline red-flag detection."""

from truth_engine.engines.behavioral.detector import (
    BehavioralPatternDetector,
    attach_patterns,
    get_behavioral_detector,
    keyword_severity,
)
from truth_engine.engines.behavioral.patterns import KEYWORD_FAMILIES, KeywordFamily

__all__ = [
    "BehavioralPatternDetector",
    "attach_patterns",
    "get_behavioral_detector",
    "keyword_severity",
    "KEYWORD_FAMILIES",
    "KeywordFamily",
]
