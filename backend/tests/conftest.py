"""Shared fixtures: sample aggregator payloads and an in-memory history store."""

from __future__ import annotations

import copy
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from scanverdict.db.base_class import Base
from scanverdict.models import history_record  # noqa: F401
from scanverdict.services.history.history_store_service import HistoryStoreService

# What the aggregator returns for a known-bad test site
SAMPLE_RESPONSE = [
    {
        "verdict": "SUSPICIOUS",
        "risk_score": 66,
        "confidence": "Medium",
        "malicious_count": 2,
        "total_engines": 60,
        "detections": [
            {"engine": "AV-Test", "result": "suspicious", "threat_type": "phishing"},
            {"engine": "MalDetect", "result": "malicious", "threat_type": "malware"},
        ],
        "results": [
            {
                "input_url": "https://example-bad.com",
                "domain": "example-bad.com",
                "ip": "198.51.100.42",
                "whois": {
                    "registrar": "BadRegistrar",
                    "org": "BadCo",
                    "country": "US",
                    "creation_date": ["2024-01-01"],
                },
                "dns": {"A": ["198.51.100.42"], "MX": [], "NS": ["ns1.bad.com"]},
                "ssl": {
                    "subject": [["CN", "example-bad.com"]],
                    "issuer": [["C", "Fake CA"]],
                    "notBefore": "2024-01-01",
                    "notAfter": "2025-01-01",
                },
                "favicon_url": None,
                "screenshot": {"image_url": None},
            }
        ],
        "count": 1,
    }
]


@pytest.fixture
def sample_response():
    return copy.deepcopy(SAMPLE_RESPONSE)


@pytest.fixture
def fixed_now():
    return datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def history_store(session_factory):
    return HistoryStoreService(session_factory=session_factory)
