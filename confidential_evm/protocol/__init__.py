from confidential_evm.protocol.base import ConfidentialProtocol
from confidential_evm.protocol.evm import (
    PLACEHOLDER_FEE,
    ConfidentialProtocolEvm,
    StableTrustProtocolEvm,
)

__all__ = [
    "ConfidentialProtocol",
    "ConfidentialProtocolEvm",
    "StableTrustProtocolEvm",
    "PLACEHOLDER_FEE",
]
