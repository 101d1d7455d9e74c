"""Contact model rules and save-time validation."""

import pytest

from cardscan.domain.hashing import compute_image_hash, verify_hash
from cardscan.domain.models import Contact
from cardscan.domain.validation import (
    prepare_contact_for_save,
    validate_contact_for_save,
    validate_reachable,
)


class TestContact:
    def test_set_if_unset_first_value_wins(self):
        contact = Contact()

        assert contact.set_if_unset("name", "Jane Doe")
        assert not contact.set_if_unset("name", "Mike Ross")
        assert contact.name == "Jane Doe"

    def test_empty_candidate_never_assigned(self):
        contact = Contact()

        assert not contact.set_if_unset("company", "")
        assert not contact.set_if_unset("company", None)
        assert contact.company is None

    def test_each_scalar_field_independent(self):
        contact = Contact()
        contact.set_if_unset("website", "www.acme.com")

        assert contact.set_if_unset("job_title", "CEO")
        assert contact.website == "www.acme.com"
        assert contact.job_title == "CEO"

    def test_set_if_unset_rejects_list_fields(self):
        with pytest.raises(ValueError):
            Contact().set_if_unset("emails", "a@b.com")

    def test_address_accumulates(self):
        contact = Contact()
        contact.append_address("12 Park Street")
        contact.append_address("")
        contact.append_address("Kolkata 700016")

        assert contact.address == "12 Park Street\nKolkata 700016"
        assert contact.address_lines == ["12 Park Street", "Kolkata 700016"]

    def test_to_text_order(self):
        contact = Contact(
            name="Jane Doe",
            company="Blue Labs",
            phone_numbers=["9876543210"],
            emails=["jane@bluelabs.in"],
            website="www.bluelabs.in",
            address="Sector 5\nKolkata 700091",
        )

        assert contact.to_text().splitlines() == [
            "Jane Doe",
            "Blue Labs",
            "Sector 5",
            "Kolkata 700091",
            "9876543210",
            "jane@bluelabs.in",
            "www.bluelabs.in",
        ]

    def test_is_empty(self):
        assert Contact().is_empty
        assert not Contact(emails=["a@b.com"]).is_empty


class TestSaveValidation:
    def test_phone_only_is_reachable(self):
        check = validate_reachable(Contact(phone_numbers=["9876543210"]))

        assert check.passed
        assert check.details == {"phone_count": 1, "email_count": 0}

    def test_email_only_is_reachable(self):
        assert validate_reachable(Contact(emails=["jane@acme.com"])).passed

    def test_blank_entries_do_not_count(self):
        check = validate_reachable(Contact(name="Jane Doe", phone_numbers=["", "  "]))

        assert not check.passed
        assert "at least one phone number or email" in check.message

    def test_validate_contact_for_save_runs_all_rules(self):
        checks = validate_contact_for_save(Contact())
        assert [c.rule_name for c in checks] == ["reachable"]

    def test_prepare_contact_trims_and_drops_blanks(self):
        contact = Contact(
            name="Jane Doe",
            phone_numbers=[" 9876543210 ", ""],
            emails=["", "jane@acme.com "],
        )
        cleaned = prepare_contact_for_save(contact)

        assert cleaned.phone_numbers == ["9876543210"]
        assert cleaned.emails == ["jane@acme.com"]
        assert cleaned.name == "Jane Doe"
        assert contact.phone_numbers == [" 9876543210 ", ""]

    def test_prepare_contact_rejects_unreachable(self):
        with pytest.raises(ValueError, match="phone number or email"):
            prepare_contact_for_save(Contact(name="Jane Doe"))


class TestHashing:
    def test_hash_prefix_and_verify(self):
        image_hash = compute_image_hash(b"card photo")

        assert image_hash.startswith("sha256:")
        assert verify_hash(b"card photo", image_hash)
        assert not verify_hash(b"other photo", image_hash)

    def test_empty_content_rejected(self):
        with pytest.raises(ValueError):
            compute_image_hash(b"")

    def test_verify_requires_prefix(self):
        with pytest.raises(ValueError):
            verify_hash(b"card photo", "md5:abc")
