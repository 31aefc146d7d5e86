"""Unit tests for the institutions domain."""

import pytest

from institutions.domain import (
    Institution,
    OnboardingRequest,
    RequestStatus,
    normalize_code,
    normalize_email_domain,
)
from shared_kernel.errors import ValidationFailedError


class TestInstitution:
    """Tests for code handling."""

    def test_codes_compare_case_insensitively(self):
        institution = Institution("i1", "Test University", "TestU", "", "", "#4AA4F2")

        assert institution.normalized_code == "TESTU"
        assert institution.matches_code(" testu ")
        assert not institution.matches_code("TEST")

    def test_normalize_code(self):
        assert normalize_code("  nfsu ") == "NFSU"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, None),
            ("", None),
            ("  ", None),
            ("@NFSU.ac.in", "nfsu.ac.in"),
            (" stanford.edu ", "stanford.edu"),
        ],
    )
    def test_normalize_email_domain(self, raw, expected):
        assert normalize_email_domain(raw) == expected


class TestOnboardingRequest:
    """Tests for OnboardingRequest."""

    def test_derived_code_is_first_four_letters(self):
        request = OnboardingRequest("r1", "  Stanford University", "Jane", "j@s.edu")

        assert request.derived_code == "STAN"

    def test_short_name_uses_whole_name(self):
        assert OnboardingRequest("r1", "mit", "Jane", "j@m.edu").derived_code == "MIT"

    def test_approve(self):
        request = OnboardingRequest("r1", "Stanford", "Jane", "j@s.edu")

        approved = request.approve()

        assert request.is_pending
        assert approved.status == RequestStatus.APPROVED
        assert not approved.is_pending

    def test_unknown_status(self):
        with pytest.raises(ValidationFailedError):
            RequestStatus.parse("ON_HOLD")
