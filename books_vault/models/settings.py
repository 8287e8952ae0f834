"""Reading settings model."""

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class Settings(BaseModel):
    """User reading settings. Always replaced as a whole."""

    model_config = ConfigDict(populate_by_name=True)

    page_unit: str = Field(default="pages", alias="pageUnit")
    target_pages: PositiveInt = Field(default=1000, alias="targetPages")
