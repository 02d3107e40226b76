# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for s3lite/types.py."""

import dataclasses

import pytest

from s3lite.types import ACL, Bucket, Region


class TestRegion:
    """Tests for Region."""

    def test_endpoints(self) -> None:
        """All twelve endpoints are present verbatim."""
        assert {r.code: r.endpoint for r in Region} == {
            "us-east-1": "s3.amazonaws.com",
            "us-east-2": "s3.us-east-2.amazonaws.com",
            "us-west-1": "s3-us-west-1.amazonaws.com",
            "us-west-2": "s3-us-west-2.amazonaws.com",
            "eu-west-1": "s3-eu-west-1.amazonaws.com",
            "eu-central-1": "s3.eu-central-1.amazonaws.com",
            "ap-south-1": "s3.ap-south-1.amazonaws.com",
            "ap-southeast-1": "s3-ap-southeast-1.amazonaws.com",
            "ap-southeast-2": "s3-ap-southeast-2.amazonaws.com",
            "ap-northeast-1": "s3-ap-northeast-1.amazonaws.com",
            "ap-northeast-2": "s3.ap-northeast-2.amazonaws.com",
            "sa-east-1": "s3-sa-east-1.amazonaws.com",
        }

    def test_from_code(self) -> None:
        """Codes map back to their region."""
        assert Region.from_code("ap-northeast-2") is Region.AP_NORTHEAST_2

    def test_from_code_case_and_whitespace(self) -> None:
        """Lookup ignores case and surrounding whitespace."""
        assert Region.from_code(" EU-Central-1 ") is Region.EU_CENTRAL_1

    def test_from_code_unknown(self) -> None:
        """Unknown codes raise ValueError listing the known codes."""
        with pytest.raises(ValueError, match="us-east-1"):
            Region.from_code("mars-north-1")


class TestACL:
    """Tests for ACL."""

    def test_default_has_no_header(self) -> None:
        """DEFAULT sends no x-amz-acl header."""
        assert ACL.DEFAULT.header_value is None

    def test_public_read(self) -> None:
        """PUBLIC_READ maps to the public-read canned ACL."""
        assert ACL.PUBLIC_READ.header_value == "public-read"


class TestBucket:
    """Tests for Bucket."""

    def test_host(self) -> None:
        """Host is the bucket name prefixed to the region endpoint."""
        bucket = Bucket("photos", Region.US_WEST_2)
        assert bucket.host == "photos.s3-us-west-2.amazonaws.com"

    def test_us_east_1_host(self) -> None:
        """us-east-1 uses the global endpoint."""
        assert Bucket("b", Region.US_EAST_1).host == "b.s3.amazonaws.com"

    def test_immutable(self) -> None:
        """Buckets are frozen values."""
        bucket = Bucket("photos", Region.US_WEST_2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            bucket.name = "other"  # type: ignore[misc]

    def test_equality(self) -> None:
        """Buckets compare by value."""
        assert Bucket("a", Region.SA_EAST_1) == Bucket("a", Region.SA_EAST_1)
