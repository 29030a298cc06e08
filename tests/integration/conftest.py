"""Shared fixtures for integration tests."""

import os

import pytest
from dotenv import load_dotenv

from clinical_literature.config import PubMedConfig
from clinical_literature.data_sources.pubmed import PubMedClient

load_dotenv()


@pytest.fixture
async def live_pubmed_client():
    """A PubMedClient against the real E-utilities endpoints."""
    c = PubMedClient(
        PubMedConfig(
            email=os.getenv("PUBMED_CONTACT_EMAIL", "clinical-literature@example.org"),
            api_key=os.getenv("NCBI_API_KEY") or None,
        )
    )
    yield c
    await c.close()
