"""
Storefront API - Customer Request/Response Schemas
====================================================

What:  Pydantic models defining the customer API contract.
How:   FastAPI parses request bodies into these models and uses them to
       generate the OpenAPI document. Request fields are all Optional[str]
       so that missing values reach the validation layer, which reports
       them as field-level 400 errors instead of a schema 422.

Absent vs supplied:
    PATCH distinguishes "field not sent" from "field sent" through
    `model_fields_set`; an explicit `"cust_city": null` counts as supplied.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CustomerCreate(BaseModel):
    """Body of POST /customers."""
    cust_code: Optional[str] = Field(default=None, description="Unique business key")
    cust_name: Optional[str] = Field(default=None, description="Customer name (required)")
    cust_city: Optional[str] = Field(default=None, description="City (optional)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"cust_code": "c1", "cust_name": "jane doe", "cust_city": "new york"}
            ]
        }
    }


class CustomerReplace(BaseModel):
    """
    Body of PUT /customers/{cust_code}.

    `cust_name` is required; an omitted `cust_city` clears the stored city.
    `cust_code` may be echoed back but must match the path.
    """
    cust_code: Optional[str] = Field(default=None, description="Must equal the path code if sent")
    cust_name: Optional[str] = Field(default=None, description="Customer name (required)")
    cust_city: Optional[str] = Field(default=None, description="City; omitted means cleared")


class CustomerPatch(BaseModel):
    """
    Body of PATCH /customers/{cust_code}.

    Only the fields present in the body are updated.
    """
    cust_code: Optional[str] = Field(default=None, description="Must equal the path code if sent")
    cust_name: Optional[str] = Field(default=None, description="New customer name")
    cust_city: Optional[str] = Field(default=None, description="New city; null clears it")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CustomerRecord(BaseModel):
    """A normalized customer as stored."""
    cust_code: str = Field(description="Business key")
    cust_name: str = Field(description="Name in title case")
    cust_city: Optional[str] = Field(default=None, description="City in title case, or null")

    model_config = {"from_attributes": True}


class CustomerCreatedResponse(BaseModel):
    """Returned by POST /customers with HTTP 201."""
    message: str = Field(default="Customer created")
    customer: CustomerRecord
