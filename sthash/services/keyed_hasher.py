import hashlib
import hmac
from typing import Callable

from sthash.core.errors import ConfigurationError
from sthash.utils.numbers import format_number

# 16 hex chars * 4 = 64 bits
HASH_VALUE_LEN = 16

KeyedHash = Callable[[float, float, float], str]

def make_hmac(key: str) -> KeyedHash:
    """
    Build the keyed hash for one secret.

    The message is the timestamp, latitude and longitude rendered by
    format_number and concatenated with no separator. Changing either the
    rendering or the concatenation changes every token, so both are part of
    the token format.
    """
    if not key:
        raise ConfigurationError("A non-empty hash key is required")

    key_bytes = key.encode("utf-8")

    def keyed_hash(timestamp: float, lat: float, lng: float) -> str:
        msg = format_number(timestamp) + format_number(lat) + format_number(lng)
        digest = hmac.new(key_bytes, msg.encode("utf-8"), hashlib.sha256).hexdigest()
        return digest[:HASH_VALUE_LEN]

    return keyed_hash
