"""Picks form payload."""

from typing import List

from pydantic import BaseModel, Field, field_validator

from swampdoge_sync.constants import PICK_SLOTS

EMPTY_PICK = "—"


class PicksSubmission(BaseModel):
    """A validated picks entry. Holds no engine state."""

    name: str = Field(..., description="Entrant name")
    wallet: str = Field(..., description="Payout wallet address")
    picks: List[str] = Field(default_factory=list, description="Up to four picks, in order")

    @field_validator("name", "wallet")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("picks")
    @classmethod
    def pad_picks(cls, v: List[str]) -> List[str]:
        picks = [(p or "").strip() for p in v[:PICK_SLOTS]]
        return picks + [""] * (PICK_SLOTS - len(picks))

    def summary(self) -> str:
        lines = [f"Name: {self.name}", f"Wallet: {self.wallet}", ""]
        lines.extend(
            f"{i}) {pick or EMPTY_PICK}" for i, pick in enumerate(self.picks, start=1)
        )
        return "\n".join(lines)
