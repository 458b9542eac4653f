"""
Pydantic response models for the API.

Field names are snake_case in Python and camelCase on the wire (aliases);
FastAPI serializes response models by alias.  Field() descriptions and
examples feed the OpenAPI docs.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── Advocate models ───────────────────────────────────────────────────────────

class AdvocateOut(_CamelModel):
    """One advocate with its specialties and derived display fields."""
    id: int = Field(..., description="Stable advocate ID (row key)", examples=[42])
    first_name: str = Field(..., alias="firstName", examples=["Alice"])
    last_name: str = Field(..., alias="lastName", examples=["Smith"])
    city: str = Field(..., examples=["Austin"])
    degree: str = Field(..., examples=["MD"])
    years_of_experience: int = Field(..., alias="yearsOfExperience", ge=0, examples=[12])
    phone_number: str = Field(..., alias="phoneNumber", description="10-digit number", examples=["5551234567"])
    created_at: str | None = Field(None, alias="createdAt", description="Creation timestamp")
    specialties: list[str] = Field(default_factory=list, description="Specialty names, sorted")
    initials: str = Field(..., description="First letters of first and last name", examples=["AS"])
    formatted_phone_number: str = Field(..., alias="formattedPhoneNumber", examples=["(555) 123-4567"])


class AdvocateListResponse(_CamelModel):
    """Response body for GET /api/v1/advocates."""
    data: list[AdvocateOut] = Field(..., description="Advocates on this page")
    next_page: int | None = Field(None, alias="nextPage", description="Page to request next; omitted on the last page", examples=[2])
    has_more: bool = Field(..., alias="hasMore", description="Whether another page exists")
    total: int | None = Field(
        None,
        description="Total matching advocates; computed on page 1 only, null afterwards",
        examples=[137],
    )


class FilterOptionsOut(BaseModel):
    """Response body for GET /api/v1/advocates/filters."""
    cities: list[str] = Field(..., description="Distinct advocate cities, sorted")
    degrees: list[str] = Field(..., description="Distinct advocate degrees, sorted")
    specialties: list[str] = Field(..., description="All specialty names, sorted")


class SeedResponse(_CamelModel):
    """Row counts written by POST /api/v1/seed."""
    advocates: int = Field(..., examples=[500])
    specialties: int = Field(..., examples=[26])
    advocate_specialties: int = Field(..., alias="advocateSpecialties", examples=[1748])


# ── Error model ───────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Internal server error"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[500])
