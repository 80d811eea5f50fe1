"""Shared card models."""

from .player import CardType, IdentityId, PlayerRecord

__all__ = ["CardType", "IdentityId", "PlayerRecord"]
