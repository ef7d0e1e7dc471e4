import logging
import re
from typing import Any, Dict, Optional

import jwt  # type: ignore

logger = logging.getLogger(__name__)

TOKEN_INFO_CLAIMS = ("tid", "aai", "uid", "actid", "rgn", "per")

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


def normalize_token(token: str) -> str:
    """Trim the token and strip an optional ``Bearer`` prefix."""
    return _BEARER_PREFIX.sub("", token.strip())


def decode_jwt_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode a monday.com token payload without verifying its signature."""
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        logger.debug(f"Could not decode API token: {e}")
        return None


def extract_token_info(token: str) -> Dict[str, Any]:
    """
    Pull the account/user identifying claims out of an API token.
    Args:
        token: monday.com API token (JWT), optionally prefixed with "Bearer"
    Returns:
        Dict with the claims present among tid, aai, uid, actid, rgn, per
    """
    payload = decode_jwt_token(normalize_token(token))
    if not payload:
        return {}
    return {claim: payload[claim] for claim in TOKEN_INFO_CLAIMS if claim in payload}
