"""Response schemas."""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema with attribute extraction enabled."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class SystemHealth(BaseSchema):
    status: str
    components: Dict[str, str] = Field(default_factory=dict)


class IpReport(BaseSchema):
    ip: str = ""
    remote_addr: str = ""
    x_forwarded_for: str = ""
    x_real_ip: str = ""
