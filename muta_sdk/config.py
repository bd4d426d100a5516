"""
Client configuration for the Muta SDK.
"""
import os
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_ENDPOINT = "http://127.0.0.1:8000/graphql"
# chain id of a node started from the default genesis
DEFAULT_CHAIN_ID = "0xb6a4d7da21443f5e816e8700eea87610e6d769657d6b8ec73028457bf2ca4036"
DEFAULT_CYCLES_LIMIT = "0xffff"
DEFAULT_CYCLES_PRICE = "0xffff"
DEFAULT_TIMEOUT_GAP = 20
DEFAULT_CONSENSUS_INTERVAL = 3.0


class ClientConfig(BaseModel):
    """Connection and transaction defaults used by :class:`MutaClient`"""
    endpoint: str = DEFAULT_ENDPOINT
    chain_id: str = DEFAULT_CHAIN_ID
    cycles_limit: str = DEFAULT_CYCLES_LIMIT
    cycles_price: str = DEFAULT_CYCLES_PRICE
    # blocks after the current height in which a transaction must be committed
    timeout_gap: int = Field(DEFAULT_TIMEOUT_GAP, gt=0)
    receipt_poll_interval: float = Field(DEFAULT_CONSENSUS_INTERVAL / 3, gt=0)
    receipt_timeout: float = Field(DEFAULT_TIMEOUT_GAP * DEFAULT_CONSENSUS_INTERVAL, gt=0)
    http_timeout: float = Field(30, gt=0)

    @classmethod
    def from_env(cls, prefix: str = "MUTA_", **overrides) -> "ClientConfig":
        """
        Build a config from environment variables.

        Recognized variables (with the default prefix): MUTA_ENDPOINT,
        MUTA_CHAIN_ID, MUTA_CYCLES_LIMIT, MUTA_CYCLES_PRICE, MUTA_TIMEOUT_GAP,
        MUTA_RECEIPT_POLL_INTERVAL, MUTA_RECEIPT_TIMEOUT, MUTA_HTTP_TIMEOUT.
        Keyword overrides win over the environment.
        """
        values = {}
        for field_name in cls.model_fields:
            env_value: Optional[str] = os.environ.get(f"{prefix}{field_name.upper()}")
            if env_value is not None:
                values[field_name] = env_value
        values.update(overrides)
        return cls(**values)
