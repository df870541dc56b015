"""Shared fixtures for evidencecore tests."""

from __future__ import annotations

import pytest

from evidencecore.engine import EvidenceEngine
from evidencecore.identity import WeIdResolver
from evidencecore.memory import InMemoryLedger


@pytest.fixture
def resolver() -> WeIdResolver:
    return WeIdResolver()


@pytest.fixture
def ledger(resolver: WeIdResolver) -> InMemoryLedger:
    return InMemoryLedger(resolver=resolver)


@pytest.fixture
def engine(ledger: InMemoryLedger, resolver: WeIdResolver) -> EvidenceEngine:
    return EvidenceEngine(ledger, resolver=resolver)
