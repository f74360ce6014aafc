"""Authorization checks shared by the issuer-side claim use cases."""

import logfire

from lunabeam.domain.error import NotAuthorizedError
from lunabeam.domain.model import Claim
from lunabeam.domain.service import SupporterService
from lunabeam.domain.value import IdentityId


async def ensure_can_manage(
    claim: Claim, identity_id: IdentityId, supporter_service: SupporterService
) -> None:
    """Allow the issuer of a claim, or anyone managing the subject's account.

    Raises:
        NotAuthorizedError: If the identity may not act on the claim
    """
    if claim.issuer_id == identity_id:
        return
    if await supporter_service.can_manage(claim.subject_id, identity_id):
        return
    logfire.warn(
        "Claim access denied", claim_id=str(claim.id), identity_id=str(identity_id)
    )
    raise NotAuthorizedError("Claim", str(claim.id), str(identity_id))
