from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress


class ServerOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    ip_address: IPvAnyAddress
    port: int = Field(..., ge=1, le=65535)
    development: bool = False
    timeout_s: float = Field(5.0, ge=2, description="http client timeout in seconds")
    workers: int = Field(8, ge=2, description="http client workers")
