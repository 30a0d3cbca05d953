"""Unit tests for name and email normalization."""

from __future__ import annotations

import pytest

from gitwiser.identity.normalize import (
    email_domain,
    email_local_part,
    is_noreply_address,
    normalize_name,
)


class TestNormalizeName:

    def test_lowercases_and_collapses_whitespace(self):
        assert normalize_name("  Jane   DOE ") == "jane doe"

    def test_punctuation_becomes_word_break(self):
        assert normalize_name("Jane.Doe") == "jane doe"
        assert normalize_name("O'Brien-Smith") == "o brien smith"

    def test_equivalent_spellings_converge(self):
        assert normalize_name("JANE_DOE") == normalize_name("jane-doe")

    def test_non_ascii_letters_are_dropped(self):
        assert normalize_name("José Núñez") == "jos n ez"

    def test_empty(self):
        assert normalize_name("") == ""
        assert normalize_name("...") == ""


class TestEmailParts:

    def test_local_part_lowercased(self):
        assert email_local_part("Jane.Doe@Acme.com") == "jane.doe"

    def test_local_part_without_at(self):
        assert email_local_part("ALEXK") == "alexk"

    def test_domain_lowercased(self):
        assert email_domain("jane@Acme.COM") == "acme.com"

    def test_domain_missing(self):
        assert email_domain("alexk") == ""

    def test_domain_is_everything_after_first_at(self):
        assert email_domain("a@b@c") == "b@c"

    def test_empty(self):
        assert email_local_part("") == ""
        assert email_domain("") == ""


class TestNoReply:

    @pytest.mark.parametrize("email", [
        "12+octo@users.noreply.github.com",
        "octo@users.noreply.gitlab.com",
        "noreply@github.com",
        "bot@No-Reply.example.io",
        "jane+git@acme.com",
    ])
    def test_noreply_addresses(self, email):
        assert is_noreply_address(email)

    @pytest.mark.parametrize("email", ["jane@acme.com", "reply@acme.com", ""])
    def test_regular_addresses(self, email):
        assert not is_noreply_address(email)
