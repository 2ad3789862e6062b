"""Classification of enrichment signals."""

from .classifier import CategoryScore, MSPClassifier
from .vocabulary import DEFAULT_VOCABULARY, MSPVocabulary

__all__ = ["CategoryScore", "MSPClassifier", "MSPVocabulary", "DEFAULT_VOCABULARY"]
