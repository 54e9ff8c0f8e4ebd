"""Session keying modes.

A deployment indexes sessions in exactly one of two ways:

    | Mode  | Cache key | Durable lookup key             | Revoke identifies by |
    |-------|-----------|--------------------------------|----------------------|
    | OWNER | owner     | (owner, origin, active=true)   | (owner, origin)      |
    | TOKEN | token     | token index, active=true       | token                |

The mode is deployment configuration, never a per-request choice.
"""

from enum import Enum


class KeyingMode(str, Enum):
    """How sessions are keyed in the cache and located in the store."""

    OWNER = "owner"
    TOKEN = "token"
