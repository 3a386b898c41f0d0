"""Top-holder records."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class HolderEntry(BaseModel):
    """One row of the largest-holder list, in source rank order."""

    model_config = ConfigDict(frozen=True)

    rank: int = Field(..., ge=1, description="1-based position in the source ranking")
    address: str = Field(..., description="Token account address")
    amount: Optional[str] = Field(None, description="Raw amount in base units")
    ui_amount: Optional[str] = Field(None, description="Display amount as reported by the source")

    @classmethod
    def from_rpc(cls, rank: int, entry: Dict[str, Any]) -> "HolderEntry":
        """Build an entry from a getTokenLargestAccounts value item."""
        ui_amount = entry.get("uiAmountString")
        if ui_amount is None and entry.get("uiAmount") is not None:
            ui_amount = str(entry["uiAmount"])
        amount = entry.get("amount")
        return cls(
            rank=rank,
            address=entry["address"],
            amount=str(amount) if amount is not None else None,
            ui_amount=ui_amount,
        )
