"""MCP tools for SSM Beam."""

from ssm_beam.tools.beam import beam

__all__ = ["beam"]
