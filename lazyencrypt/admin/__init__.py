"""Operator-facing administration of the stored secret."""

from lazyencrypt.admin.manager import SecretAdmin

__all__ = ["SecretAdmin"]
