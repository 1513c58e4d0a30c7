"""
Caller identity resolution.

Turns the host's opaque creator credential into the caller's common name and
short organization, which the contracts use as the authorization role.
"""
from .resolver import CallerIdentity, IdentityResolver, resolve_identity

__all__ = ["CallerIdentity", "IdentityResolver", "resolve_identity"]
