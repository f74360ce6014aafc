"""Domain model entities for LunaBeam."""

from lunabeam.domain.model.claim import Claim
from lunabeam.domain.model.credential import AuthCredential
from lunabeam.domain.model.profile import Profile
from lunabeam.domain.model.supporter import Supporter

__all__ = [
    "AuthCredential",
    "Claim",
    "Profile",
    "Supporter",
]
