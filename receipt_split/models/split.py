"""
Data models for splitting an expense between participants.
"""

from decimal import Decimal
from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Participant(BaseModel):
    """A person sharing an expense. Identity is the trimmed, case-sensitive name."""
    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Participant name must not be blank')
        return v.strip()


class Allocation(BaseModel):
    """One participant's share of an expense total."""
    model_config = ConfigDict(frozen=True)

    participant: Participant
    amount_owed: Decimal = Field(ge=0)
    percentage: Optional[float] = None


class EvenSplit(BaseModel):
    """Divide the total equally."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["even"] = "even"


class ByAmount(BaseModel):
    """Each named participant owes a fixed amount."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["by_amount"] = "by_amount"
    amounts: Dict[str, Decimal] = Field(default_factory=dict)


class ByPercentage(BaseModel):
    """Each named participant owes a percentage (0-100) of the total."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["by_percentage"] = "by_percentage"
    percentages: Dict[str, float] = Field(default_factory=dict)


# Tagged union; the 'kind' field picks the variant when validating raw data
SplitStrategy = Annotated[
    Union[EvenSplit, ByAmount, ByPercentage],
    Field(discriminator="kind"),
]


class Settlement(BaseModel):
    """A suggested transfer that moves a debtor towards a zero balance."""
    model_config = ConfigDict(frozen=True)

    debtor: str
    creditor: str
    amount: Decimal = Field(gt=0)
