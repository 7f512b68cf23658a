"""Configuration module for SSM Beam.

- Settings: Environment variable configuration (SSM_BEAM_* with
  GitHub Actions INPUT_* fallback for the transfer inputs)
"""

from ssm_beam.config.settings import Settings

__all__ = ["Settings"]
