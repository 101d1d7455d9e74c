"""Locale profiles: defaults, overrides and the registry."""

import re

import pytest

from cardscan.errors import UnknownProfileError
from cardscan.services.parsing import ContactExtractor, profiles
from cardscan.services.parsing.profiles import (
    INDIA_PROFILE,
    LocaleProfile,
    available_profiles,
    get_profile,
    register_profile,
)


@pytest.fixture
def isolated_registry(monkeypatch):
    monkeypatch.setattr(profiles, "_PROFILES", dict(profiles._PROFILES))


def test_default_profile_is_india():
    assert get_profile() is INDIA_PROFILE
    assert get_profile("IN") is INDIA_PROFILE


def test_patterns_are_compiled(profile):
    for pattern in (profile.phone_pattern, profile.postal_code_pattern,
                    profile.email_pattern, profile.website_pattern):
        assert isinstance(pattern, re.Pattern)


def test_default_thresholds(profile):
    assert profile.job_title_max_length == 50
    assert profile.name_max_length == 40
    assert profile.name_max_tokens == 4


def test_profile_is_immutable(profile):
    with pytest.raises(AttributeError):
        profile.name_max_tokens = 10


def test_keyword_lists_become_tuples():
    custom = INDIA_PROFILE.with_overrides(job_title_keywords=["Chef"])
    assert custom.job_title_keywords == ("Chef",)


def test_invalid_threshold_rejected():
    with pytest.raises(ValueError):
        INDIA_PROFILE.with_overrides(name_max_tokens=0)


def test_override_changes_behaviour_without_touching_default(sample_text):
    strict = INDIA_PROFILE.with_overrides(name="strict", job_title_max_length=10)

    assert ContactExtractor(strict).extract(sample_text).job_title is None
    assert ContactExtractor(INDIA_PROFILE).extract(sample_text).job_title == "Senior Engineer"


def test_custom_keywords_and_phone_pattern():
    uk = INDIA_PROFILE.with_overrides(
        name="uk",
        job_title_keywords=("Chef",),
        company_keywords=("Bistro",),
        address_keywords=("High Street",),
        region_keywords=("London",),
        phone_pattern=r'(?:\+44\s?|0)7\d{3}\s?\d{6}',
        postal_code_pattern=r'\b[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}\b',
    )
    text = "Sam Carter\nHead Chef\nThe Corner Bistro\n10 High Street\nLondon SW1A 1AA\n07700 900123"
    contact = ContactExtractor(uk).extract(text)

    assert contact.name == "Sam Carter"
    assert contact.job_title == "Head Chef"
    assert contact.company == "The Corner Bistro"
    assert contact.address == "10 High Street\nLondon SW1A 1AA"
    assert contact.phone_numbers == ["07700900123"]


def test_unknown_profile_raises():
    with pytest.raises(UnknownProfileError) as exc_info:
        get_profile("xx")

    assert exc_info.value.name == "xx"
    assert "in" in exc_info.value.available


def test_register_profile(isolated_registry):
    custom = INDIA_PROFILE.with_overrides(name="in-test")
    register_profile(custom)

    assert get_profile("in-test") is custom
    assert "in-test" in available_profiles()


def test_register_duplicate_requires_replace(isolated_registry):
    custom = INDIA_PROFILE.with_overrides(name="in")

    with pytest.raises(ValueError):
        register_profile(custom)

    register_profile(custom, replace_existing=True)
    assert get_profile("in") is custom


def test_describe_lists_tables(profile):
    described = profile.describe()

    assert described["name"] == "in"
    assert "Karnataka" in described["region_keywords"]
    assert described["postal_code_pattern"] == r'\b[1-9][0-9]{5}\b'


def test_profile_accepts_compiled_patterns():
    compiled = re.compile(r'\d{5}')
    custom = LocaleProfile(
        name="zip",
        job_title_keywords=(),
        company_keywords=(),
        address_keywords=(),
        region_keywords=(),
        phone_pattern=r'\d{3}-\d{4}',
        postal_code_pattern=compiled,
    )
    assert custom.postal_code_pattern is compiled
