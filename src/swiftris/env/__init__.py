"""Gymnasium environments for Swiftris."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Swiftris-10x20-v0",
    entry_point="swiftris.env.swiftris_env:SwiftrisEnv",
)

__all__ = ["Swiftris-10x20-v0"]
