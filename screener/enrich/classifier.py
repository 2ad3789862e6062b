"""MSP likelihood classification from enrichment text."""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Optional

from screener.models import (
    CompanyRecord,
    EnrichmentSignals,
    MSPIndicator,
    MSPLikelihood,
)
from .vocabulary import DEFAULT_VOCABULARY, MSPVocabulary

logger = logging.getLogger(__name__)


@dataclass
class CategoryScore:
    """Points and evidence for one classifier category."""

    category: str
    points: float
    evidence: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.evidence)


class MSPClassifier:
    """Estimate how likely a company is to be an IT managed service provider.

    The score sums independent categories (keywords, services, technology,
    description, SIC code). Non-MSP phrasing such as "software development"
    dampens the keyword category and raises the bar for medium confidence.
    """

    def __init__(self, vocabulary: Optional[MSPVocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._description_patterns = [
            re.compile(p, re.I) for p in self.vocabulary.description_patterns
        ]

    def classify(
        self,
        enrichment: EnrichmentSignals,
        company_name: str = "",
        sic_codes: Optional[list[str]] = None,
    ) -> MSPLikelihood:
        """Classify from enrichment signals, company name and SIC codes."""
        vocab = self.vocabulary
        sic_codes = sic_codes or []
        corpus = self.build_corpus(enrichment, company_name)

        negatives = self.find_negative_keywords(corpus)
        penalty = self.context_penalty(len(negatives))

        keywords = self.score_keywords(corpus, penalty)
        services = self.score_services(enrichment.services)
        technology = self.score_technology(enrichment.tech_stack)
        description = self.score_description(enrichment.business_description or "")
        sic = self.score_sic_codes(sic_codes)
        categories = [keywords, services, technology, description, sic]

        raw_score = sum(c.points for c in categories)
        is_specialized = self.is_specialized(services.evidence)
        confidence = self.confidence(raw_score, penalty, has_negative_context=bool(negatives))

        indicators = [
            MSPIndicator(
                category="Negative Keywords (non-MSP indicators)",
                found=bool(negatives),
                evidence=negatives[:vocab.max_evidence],
            )
        ]
        indicators.extend(
            MSPIndicator(
                category=c.category,
                found=c.found,
                evidence=c.evidence[:vocab.max_evidence],
            )
            for c in categories
        )
        indicators.append(MSPIndicator(
            category="Specialized MSP (not full-service)",
            found=is_specialized,
            evidence=["Detected as specialized MSP (backup/security only)"] if is_specialized else [],
        ))

        return MSPLikelihood(
            score=min(100, math.floor(raw_score + 0.5)),
            confidence=confidence,
            context_penalty=penalty,
            is_specialized=is_specialized,
            indicators=indicators,
            vocabulary_version=vocab.version,
        )

    def classify_company(self, company: CompanyRecord) -> MSPLikelihood:
        result = self.classify(company.enrichment, company.company_name, company.sic_codes)
        logger.debug(
            f"MSP likelihood for {company.company_number}: "
            f"{result.score} ({result.confidence})"
        )
        return result

    @staticmethod
    def build_corpus(enrichment: EnrichmentSignals, company_name: str = "") -> str:
        """Join all text sources into one lowercase string."""
        parts = [
            *enrichment.business_keywords,
            *enrichment.services,
            *enrichment.tech_stack,
            enrichment.business_description or "",
            company_name or "",
        ]
        return " ".join(parts).lower()

    def find_negative_keywords(self, corpus: str) -> list[str]:
        return [k for k in self.vocabulary.negative_keywords if k.lower() in corpus]

    def context_penalty(self, negative_matches: int) -> float:
        """Multiplier for the keyword category: 1.0 when no negative context."""
        if negative_matches == 0:
            return 1.0
        vocab = self.vocabulary
        return max(vocab.penalty_floor, 1 - negative_matches * vocab.penalty_step)

    def score_keywords(self, corpus: str, penalty: float = 1.0) -> CategoryScore:
        """Share of MSP keywords present anywhere in the corpus."""
        vocab = self.vocabulary
        found = [k for k in vocab.msp_keywords if k.lower() in corpus]
        ratio = len(found) / len(vocab.msp_keywords)
        points = min(vocab.keyword_weight, ratio * vocab.keyword_weight) * penalty
        return CategoryScore("MSP Keywords", points, found)

    def score_services(self, services: list[str]) -> CategoryScore:
        """Share of declared services that are MSP services."""
        vocab = self.vocabulary
        found = [
            service for service in services
            if any(term.lower() in service.lower() for term in vocab.msp_services)
        ]
        ratio = len(found) / max(1, len(services))
        return CategoryScore("MSP Services", min(vocab.service_weight, ratio * vocab.service_weight), found)

    def score_technology(self, tech_stack: list[str]) -> CategoryScore:
        """Share of technology mentions that are IT infrastructure vendors."""
        vocab = self.vocabulary
        found = [
            tech for tech in tech_stack
            if any(term.lower() in tech.lower() for term in vocab.infrastructure_tech)
        ]
        ratio = len(found) / max(1, len(tech_stack))
        return CategoryScore(
            "IT Infrastructure Technology",
            min(vocab.tech_weight, ratio * vocab.tech_weight),
            found,
        )

    def score_description(self, description: str) -> CategoryScore:
        vocab = self.vocabulary
        matches = sum(1 for p in self._description_patterns if p.search(description))
        ratio = matches / len(self._description_patterns) if self._description_patterns else 0.0
        return CategoryScore(
            "Business Description",
            min(vocab.description_weight, ratio * vocab.description_weight),
            ["Contains MSP-related descriptions"] if matches else [],
        )

    def score_sic_codes(self, sic_codes: list[str]) -> CategoryScore:
        vocab = self.vocabulary
        matched = [
            code for code in sic_codes
            if any(target in code for target in vocab.target_sic_codes)
        ]
        return CategoryScore(
            "SIC Code (IT Services)",
            vocab.sic_bonus if matched else 0.0,
            matched,
        )

    @staticmethod
    def is_specialized(matched_services: list[str]) -> bool:
        """Backup-only or security-only service evidence. Does not affect the score."""
        lowered = [s.lower() for s in matched_services]

        def has(*terms: str) -> bool:
            return any(term in s for s in lowered for term in terms)

        backup_only = has("backup") and not has("it support", "helpdesk")
        security_only = has("security", "mdr") and not has("infrastructure", "network management")
        return backup_only or security_only

    def confidence(
        self,
        score: float,
        penalty: float,
        has_negative_context: bool = False,
    ) -> str:
        vocab = self.vocabulary
        if score >= vocab.high_threshold:
            return "high"

        min_penalty = (
            vocab.medium_min_penalty_negative if has_negative_context else vocab.medium_min_penalty
        )
        if score >= vocab.medium_threshold and penalty >= min_penalty:
            return "medium"
        return "low"
