"""Postal record schema."""

from pydantic import BaseModel, ConfigDict, Field


class ZipRecord(BaseModel):
    """One postal entry. Serialized as {"zip", "city", "state"}."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str = Field(..., alias="zip", description="Postal code")
    city: str = Field(..., description="Locality name, as found in the dataset")
    region: str = Field(..., alias="state", description="Administrative subdivision")
