# src/shared/error_codes.py
# Central mapping for the error contract.
# Keep keys stable: webhook senders and operators rely on these.
ERROR_CODES = {
    # ─── Validation & Requests ──────────────────────────────────────────────
    "validation_error": {
        "http": 400,
        "message": "Validation failed for one or more fields."
    },
    "invalid_argument": {
        "http": 400,
        "message": "A required argument is missing."
    },
    "invalid_payload": {
        "http": 400,
        "message": "The WebHook request must contain an entity body formatted as a JSON object."
    },
    "not_found": {
        "http": 404,
        "message": "Resource not found."
    },
    "receiver_not_found": {
        "http": 404,
        "message": "No WebHook receiver is registered under this name."
    },
    "method_not_allowed": {
        "http": 405,
        "message": "The HTTP method is not supported by this WebHook receiver."
    },

    # ─── WebHook authentication ─────────────────────────────────────────────
    "secret_unresolved": {
        "http": 400,
        "message": "Could not find a valid configuration for this WebHook receiver."
    },
    "header_missing": {
        "http": 400,
        "message": "Expecting exactly one signature header field in the WebHook request."
    },
    "malformed_header": {
        "http": 400,
        "message": "Invalid signature header value."
    },
    "bad_encoding": {
        "http": 400,
        "message": "The signature header value is not a valid hex-encoded string."
    },
    "signature_mismatch": {
        "http": 400,
        "message": "The WebHook signature provided by the signature header field does not match the value expected."
    },
    "bad_verify_token": {
        "http": 400,
        "message": "The WebHook verification request must contain a valid 'hub.mode' and 'hub.verify_token'."
    },
    "invalid_challenge": {
        "http": 400,
        "message": "The 'hub.challenge' query parameter must be an integer."
    },

    # ─── Server ─────────────────────────────────────────────────────────────
    "internal_error": {
        "http": 500,
        "message": "An unexpected error occurred."
    },
}
