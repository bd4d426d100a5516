"""
Data models for the Muta SDK.

Attributes are snake_case; the camelCase names used by the node's GraphQL
API are accepted and emitted through aliases.
"""
import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


def _uint64_to_hex(value: Any) -> Any:
    """Render ints as the node's ``Uint64`` hex scalar, leave strings alone."""
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid Uint64")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Uint64 must be non-negative, got {value}")
        return hex(value)
    return value


class QueryServiceParam(BaseModel):
    """Parameters of a read-only service call"""
    service_name: str = Field(..., alias="serviceName", min_length=1)
    method: str = Field(..., min_length=1)
    payload: Any = None
    height: Optional[str] = None
    caller: Optional[str] = None
    cycles_limit: Optional[str] = Field(None, alias="cyclesLimit")
    cycles_price: Optional[str] = Field(None, alias="cyclesPrice")

    @field_validator("height", "cycles_limit", "cycles_price", mode="before")
    @classmethod
    def hex_uint64(cls, value: Any) -> Any:
        return _uint64_to_hex(value)

    class Config:
        populate_by_name = True


class Transaction(BaseModel):
    """An unsigned transaction, ready to be signed or handed off for offline signing"""
    chain_id: str = Field(..., alias="chainId")
    cycles_limit: str = Field(..., alias="cyclesLimit")
    cycles_price: str = Field(..., alias="cyclesPrice")
    nonce: str
    timeout: str
    service_name: str = Field(..., alias="serviceName", min_length=1)
    method: str = Field(..., min_length=1)
    payload: str

    @field_validator("cycles_limit", "cycles_price", "timeout", mode="before")
    @classmethod
    def hex_uint64(cls, value: Any) -> Any:
        return _uint64_to_hex(value)

    @field_validator("payload", mode="before")
    @classmethod
    def encode_payload(cls, value: Any) -> Any:
        # The chain only carries strings; structured payloads travel as JSON.
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return json.dumps(value)

    class Config:
        populate_by_name = True
        frozen = True


class InputEncryption(BaseModel):
    """Signature envelope attached to a transaction"""
    tx_hash: str = Field(..., alias="txHash")
    pubkey: str
    signature: str

    class Config:
        populate_by_name = True
        frozen = True


class SignedTransaction(BaseModel):
    """A transaction together with its signature envelope"""
    input_raw: Transaction = Field(..., alias="inputRaw")
    input_encryption: InputEncryption = Field(..., alias="inputEncryption")

    class Config:
        populate_by_name = True
        frozen = True


class ExecResp(BaseModel):
    """Result of a read-only service call"""
    is_error: bool = Field(..., alias="isError")
    ret: Any = None

    class Config:
        populate_by_name = True


class Event(BaseModel):
    service: str
    data: str


class ReceiptResponse(BaseModel):
    """Outcome of the service method a transaction invoked"""
    service_name: str = Field(..., alias="serviceName")
    method: str
    ret: Any = None
    is_error: bool = Field(..., alias="isError")

    class Config:
        populate_by_name = True


class Receipt(BaseModel):
    """Execution receipt of a committed transaction"""
    tx_hash: str = Field(..., alias="txHash")
    height: str
    cycles_used: str = Field(..., alias="cyclesUsed")
    events: List[Event] = Field(default_factory=list)
    state_root: str = Field(..., alias="stateRoot")
    response: ReceiptResponse

    class Config:
        populate_by_name = True

    def to_dict(self) -> Dict[str, Any]:
        """Dump with the node's camelCase field names"""
        return self.model_dump(by_alias=True)
