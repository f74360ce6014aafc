"""Strongly typed identifiers for LunaBeam domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
ClaimId = NewType("ClaimId", UUID)
IdentityId = NewType("IdentityId", UUID)
ProfileId = NewType("ProfileId", UUID)
SupporterId = NewType("SupporterId", UUID)
