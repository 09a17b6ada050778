"""Credential Minting - which credential a verified achievement mints into.

Invariants:
    - Only verified, not-yet-minted achievements are mintable
    - Achievement type maps to a credential tag; unknown types fall back to
      leadership_legend
    - Freshly minted credentials are Common, level 1, with no staking rewards
"""

from dataclasses import dataclass
from datetime import datetime

from marketplace.core.domain_types import AchievementStatus, Rarity
from marketplace.core.errors import ConflictError

DEFAULT_CREDENTIAL_TAG = "leadership_legend"

CREDENTIAL_TAGS = {
    "gpa": "gpa_guardian",
    "academic": "gpa_guardian",
    "research": "research_rockstar",
    "leadership": "leadership_legend",
}


@dataclass(frozen=True)
class CredentialDraft:
    credential_tag: str
    name: str
    rarity: Rarity
    level: int
    token_id: str


def credential_tag_for(achievement_type: str) -> str:
    return CREDENTIAL_TAGS.get(achievement_type.strip().lower(), DEFAULT_CREDENTIAL_TAG)


def ensure_mintable(status: str, nft_minted: bool) -> None:
    if nft_minted:
        raise ConflictError("A credential was already minted for this achievement")
    if status != AchievementStatus.VERIFIED.value:
        raise ConflictError(f"Only verified achievements can be minted (status is {status})")


def draft_credential(achievement_type: str, minted_at: datetime, nonce: str) -> CredentialDraft:
    """Describe the credential to mint; the caller supplies time and a random nonce."""
    tag = credential_tag_for(achievement_type)
    return CredentialDraft(
        credential_tag=tag,
        name=tag.replace("_", " ").title(),
        rarity=Rarity.COMMON,
        level=1,
        token_id=f"{int(minted_at.timestamp() * 1000)}-{nonce}",
    )
