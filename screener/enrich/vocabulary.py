"""Versioned vocabulary and weight table for the MSP classifier."""

from pydantic import BaseModel, Field


class MSPVocabulary(BaseModel):
    """Terms, patterns, weights and thresholds used by ``MSPClassifier``.

    Bump ``version`` whenever a list or number changes so stored scores can be
    traced back to the table that produced them.
    """

    version: str = "2024.1"

    negative_keywords: list[str] = Field(default_factory=lambda: [
        "software development", "application development", "engineering services",
        "custom software", "software engineering", "digital transformation",
        "digital solutions", "digital commerce", "ui/ux", "mobility engineering",
        "audio visual", "av systems", "stage solutions", "smart building",
        "systems integrator", "master systems integrator", "generative ai",
        "gen ai", "ai/ml", "machine learning",
    ])

    msp_keywords: list[str] = Field(default_factory=lambda: [
        "msp", "managed service provider", "managed services",
        "it support", "it services", "it consultancy", "it consulting",
        "managed it", "managed it services", "managed it support",
        "outsourced it", "it outsourcing", "it managed services",
        "helpdesk", "service desk", "it help desk",
        "network support", "infrastructure support", "cloud services",
        "cybersecurity", "cyber security", "it security",
        "remote monitoring", "remote management", "rmm",
        "professional services automation", "psa",
        "endpoint management", "device management",
    ])

    msp_services: list[str] = Field(default_factory=lambda: [
        "managed services", "it support", "helpdesk", "service desk",
        "network management", "server management", "cloud management",
        "security monitoring", "backup", "disaster recovery",
        "remote support", "on-site support", "it consultancy",
        "it consulting", "infrastructure management", "endpoint management",
        "patch management", "antivirus management", "email security",
        "firewall management", "vpn", "remote access",
    ])

    infrastructure_tech: list[str] = Field(default_factory=lambda: [
        "microsoft 365", "office 365", "azure", "active directory",
        "windows server", "exchange", "sharepoint", "teams",
        "vmware", "hyper-v", "virtualization", "citrix",
        "cisco", "fortinet", "sonicwall", "palo alto",
        "connectwise", "kaseya", "n-able", "datto",
        "veeam", "acronis", "backup", "disaster recovery",
        "sophos", "symantec", "mcafee", "crowdstrike",
        "sentinelone", "bitdefender", "eset",
    ])

    # Case-insensitive regular expressions matched against the description
    description_patterns: list[str] = Field(default_factory=lambda: [
        r"managed (it )?service",
        r"it support",
        r"helpdesk",
        r"service desk",
        r"remote (monitoring|management|support)",
        r"outsourced it",
        r"it outsourcing",
        r"network (management|support)",
        r"infrastructure (management|support)",
        r"cloud (services|management)",
    ])

    target_sic_codes: list[str] = Field(default_factory=lambda: ["62020", "62090"])

    # Category weights (maximum points)
    keyword_weight: float = 30.0
    service_weight: float = 25.0
    tech_weight: float = 20.0
    description_weight: float = 15.0
    sic_bonus: float = 10.0

    # Negative context penalty: max(floor, 1 - step * matches)
    penalty_step: float = 0.2
    penalty_floor: float = 0.3

    # Confidence gating
    high_threshold: float = 30.0
    medium_threshold: float = 15.0
    medium_min_penalty: float = 0.3
    medium_min_penalty_negative: float = 0.6

    # Evidence entries kept per indicator
    max_evidence: int = 5


DEFAULT_VOCABULARY = MSPVocabulary()
