"""Strongly typed identifiers for Gatehouse domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", UUID)
ExternalIdentityId = NewType("ExternalIdentityId", UUID)
