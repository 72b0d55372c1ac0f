from typing import Dict, Optional

from fastapi import Request
from jose import JWTError, jwt


def extract_user_identity(request: Optional[Request], payload: Dict) -> str:
    """
    Identify the caller for request logs only (never for authorization):
    1. IAM proxy header
    2. Bearer JWT claims (signature not verified)
    3. Payload user_id
    4. anonymous
    """
    headers = request.headers if request is not None else {}

    user_email = headers.get("X-Goog-Authenticated-User-Email")
    if user_email:
        return user_email.split(":")[-1]

    auth_header = headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.split(" ", 1)[1]
        try:
            claims = jwt.get_unverified_claims(token)
            return claims.get("email") or claims.get("sub") or "unknown_user"
        except JWTError:
            pass

    if payload.get("user_id"):
        return payload["user_id"]

    return "anonymous"
