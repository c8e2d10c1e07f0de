"""Scripted traffic generator for a running AgentBot API."""

from .sim import ISim, Sim

__all__ = ["ISim", "Sim"]
