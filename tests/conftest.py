"""Shared fixtures for the CardScan test suite."""

import io
import logging
from types import SimpleNamespace

import pytest
from PIL import Image

from cardscan.config import get_settings
from cardscan.services.parsing import ContactExtractor, INDIA_PROFILE

# Keep extraction logs out of the way unless a test asks for them
logging.getLogger("cardscan").setLevel(logging.WARNING)


SAMPLE_CARD_TEXT = (
    "John Smith\n"
    "Senior Engineer\n"
    "Acme Technologies Pvt Ltd\n"
    "123 MG Road, Bangalore 560001\n"
    "Karnataka\n"
    "Ph: 9876543210\n"
    "Email: john@acme.com\n"
    "www.acme.com"
)


@pytest.fixture
def profile():
    return INDIA_PROFILE


@pytest.fixture
def extractor(profile):
    return ContactExtractor(profile)


@pytest.fixture
def sample_text():
    return SAMPLE_CARD_TEXT


@pytest.fixture
def png_bytes():
    """A tiny valid PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (12, 8), color="white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make every test read its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_doctr_result(pages):
    """
    Build an object shaped like a docTR prediction.

    pages: list of pages, each a list of lines, each a list of
    (word, confidence) tuples. Every page holds a single block.
    """
    return SimpleNamespace(pages=[
        SimpleNamespace(blocks=[SimpleNamespace(lines=[
            SimpleNamespace(words=[
                SimpleNamespace(value=value, confidence=conf) for value, conf in line
            ])
            for line in page
        ])])
        for page in pages
    ])


class FakePredictor:
    """Stands in for a docTR predictor; returns a canned result."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = 0

    def __call__(self, doc):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


def card_predictor(text, confidence=0.95):
    """A FakePredictor that 'recognizes' the given card text."""
    lines = [
        [(word, confidence) for word in line.split()]
        for line in text.splitlines()
    ]
    return FakePredictor(make_doctr_result([lines]))
