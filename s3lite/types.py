# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Value types addressing storage: regions, buckets and access control."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Region(Enum):
    """S3 service regions, valued by their endpoint host suffix."""

    US_EAST_1 = "s3.amazonaws.com"
    US_EAST_2 = "s3.us-east-2.amazonaws.com"
    US_WEST_1 = "s3-us-west-1.amazonaws.com"
    US_WEST_2 = "s3-us-west-2.amazonaws.com"

    EU_WEST_1 = "s3-eu-west-1.amazonaws.com"
    EU_CENTRAL_1 = "s3.eu-central-1.amazonaws.com"

    AP_SOUTH_1 = "s3.ap-south-1.amazonaws.com"
    AP_SOUTHEAST_1 = "s3-ap-southeast-1.amazonaws.com"
    AP_SOUTHEAST_2 = "s3-ap-southeast-2.amazonaws.com"
    AP_NORTHEAST_1 = "s3-ap-northeast-1.amazonaws.com"
    AP_NORTHEAST_2 = "s3.ap-northeast-2.amazonaws.com"
    SA_EAST_1 = "s3-sa-east-1.amazonaws.com"

    @property
    def endpoint(self) -> str:
        """Endpoint host suffix (e.g. ``s3-eu-west-1.amazonaws.com``)."""
        return self.value

    @property
    def code(self) -> str:
        """Region code as used in configuration (e.g. ``eu-west-1``)."""
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_code(cls, code: str) -> Region:
        """Look up a region by its code.

        Args:
            code: Region code such as ``us-west-2`` (case-insensitive).

        Returns:
            The matching Region.

        Raises:
            ValueError: If the code names no known region.
        """
        wanted = code.strip().lower()
        for region in cls:
            if region.code == wanted:
                return region
        known = ", ".join(r.code for r in cls)
        raise ValueError(f"Unknown region {code!r} (known: {known})")


class ACL(Enum):
    """Canned access control applied to uploaded objects."""

    DEFAULT = "default"
    PUBLIC_READ = "public-read"

    @property
    def header_value(self) -> str | None:
        """Value for the ``x-amz-acl`` header, or None to omit it."""
        if self is ACL.DEFAULT:
            return None
        return self.value


@dataclass(frozen=True)
class Bucket:
    """A named bucket in a region.

    Attributes:
        name: Bucket name.
        region: Region hosting the bucket.
    """

    name: str
    region: Region

    @property
    def host(self) -> str:
        """Virtual-hosted style host name for the bucket."""
        return f"{self.name}.{self.region.endpoint}"
