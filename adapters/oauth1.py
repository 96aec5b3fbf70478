"""
OAuth 1.0 request signing (HMAC-SHA1, two-legged, no token).
"""

import base64
import hashlib
import hmac
import time
import uuid
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import quote


def percent_encode(value: str) -> str:
    """RFC 3986 encoding: only ASCII letters, digits and ``-._~`` pass through."""
    return quote(value, safe="~")


class OAuth1Signer:
    def __init__(self, consumer_key: str, consumer_secret: str):
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret

    @staticmethod
    def generate_timestamp() -> str:
        return str(int(time.time()))

    @staticmethod
    def generate_nonce() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def signature_base_string(method: str, url: str, params: Mapping[str, str]) -> str:
        encoded = sorted(
            (percent_encode(key), percent_encode(value)) for key, value in params.items()
        )
        param_string = "&".join(f"{key}={value}" for key, value in encoded)
        return "&".join(
            [
                percent_encode(method.upper()),
                percent_encode(url),
                percent_encode(param_string),
            ]
        )

    def signing_key(self, token_secret: str = "") -> str:
        return f"{percent_encode(self.consumer_secret)}&{percent_encode(token_secret)}"

    @staticmethod
    def hmac_sha1(base_string: str, key: str) -> str:
        digest = hmac.new(
            key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def sign(
        self,
        method: str,
        url: str,
        params: Optional[Mapping[str, str]] = None,
        timestamp: Optional[str] = None,
        nonce: Optional[str] = None,
    ) -> Tuple[str, str, str]:
        """
        Sign a request.

        Returns:
            (signature, timestamp, nonce)
        """
        timestamp = timestamp or self.generate_timestamp()
        nonce = nonce or self.generate_nonce()
        all_params = dict(params or {})
        all_params.update(self.oauth_params(timestamp, nonce))
        base_string = self.signature_base_string(method, url, all_params)
        return self.hmac_sha1(base_string, self.signing_key()), timestamp, nonce

    def oauth_params(self, timestamp: str, nonce: str) -> Dict[str, str]:
        return {
            "oauth_consumer_key": self.consumer_key,
            "oauth_signature_method": "HMAC-SHA1",
            "oauth_timestamp": timestamp,
            "oauth_nonce": nonce,
            "oauth_version": "1.0",
        }

    def signed_params(self, method: str, url: str, params: Mapping[str, str]) -> Dict[str, str]:
        """Request parameters plus the oauth_* fields and signature."""
        signature, timestamp, nonce = self.sign(method, url, params)
        signed = dict(params)
        signed.update(self.oauth_params(timestamp, nonce))
        signed["oauth_signature"] = signature
        return signed
