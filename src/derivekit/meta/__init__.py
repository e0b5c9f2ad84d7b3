"""Metaprogramming core of derivekit: field metadata, capabilities and composition."""
