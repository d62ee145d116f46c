from .signing import (
    SIGNATURE_ALGORITHM,
    compute_signature,
    decode_hex,
    encode_hex,
    escape_non_ascii,
    signature_header_value,
)

__all__ = [
    "SIGNATURE_ALGORITHM",
    "compute_signature",
    "decode_hex",
    "encode_hex",
    "escape_non_ascii",
    "signature_header_value",
]
