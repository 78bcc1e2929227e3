"""
Release entry models.

A ReleaseEntry is built fresh from feed content on every request. Fields
that could not be extracted carry a sentinel value instead of being absent.
"""

from pydantic import BaseModel, ConfigDict, Field

# Sentinel values for fields that could not be extracted
UNKNOWN_ID = -1
UNKNOWN = "Unknown"
NO_LINK = "No link found"


class ReleaseEntry(BaseModel):
    """One release extracted from an Atom feed entry."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(default=UNKNOWN_ID, description="Release ID, -1 when absent")
    date: str = Field(default=UNKNOWN, description="Release date as written in the entry")
    version: str = Field(default=UNKNOWN, description="Release version")
    tag: str = Field(default=UNKNOWN, description="Release tag")
    name: str = Field(default=UNKNOWN, description="Release name")
    type: str = Field(default=UNKNOWN, description="Release type")
    download_link: str = Field(
        default=NO_LINK, alias="downloadLink", description="Download URL"
    )
    github_link: str = Field(
        default=NO_LINK, alias="githubLink", description="Source repository URL"
    )

    def to_dict(self) -> dict:
        """Convert to the JSON shape served by the API."""
        return self.model_dump(by_alias=True)


class ReleaseListResponse(BaseModel):
    """Schema for the release list response."""

    entries: list[ReleaseEntry]

    def to_dict(self) -> dict:
        """Convert to the JSON shape served by the API."""
        return {"entries": [entry.to_dict() for entry in self.entries]}
