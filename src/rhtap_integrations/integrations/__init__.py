"""Source control integrations.

Each integration stores the credentials of one external service in a
Kubernetes secret.
"""

from rhtap_integrations.integrations.bitbucket import (
    DEFAULT_PUBLIC_BITBUCKET_HOST,
    SECRET_NAME,
    BitBucketIntegration,
)

__all__ = [
    "BitBucketIntegration",
    "DEFAULT_PUBLIC_BITBUCKET_HOST",
    "SECRET_NAME",
]
