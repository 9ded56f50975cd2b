from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey


def verify_signature(req, public_key):
    """
    Verifies Discord's signature on incoming requests.

    Args:
        req: The Flask request object.
        public_key (str): Hex-encoded Ed25519 application public key.

    Raises:
        ValueError: If the signature is invalid or missing.
    """
    signature = req.headers.get("X-Signature-Ed25519")
    timestamp = req.headers.get("X-Signature-Timestamp")
    body = req.get_data()

    if not signature or not timestamp:
        raise ValueError("Missing signature or timestamp")
    if not public_key:
        raise ValueError("Public key is not configured")

    try:
        verify_key = VerifyKey(bytes.fromhex(public_key))
        verify_key.verify(timestamp.encode() + body, bytes.fromhex(signature))
    except BadSignatureError:
        raise ValueError("Invalid request signature")
    except ValueError as e:
        # Non-hex or wrong-length key/signature
        raise ValueError(f"Malformed signature or key: {e}")
