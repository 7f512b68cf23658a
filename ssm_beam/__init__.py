"""SSM Beam: move a local file onto an EC2 instance via S3 and SSM."""

__version__ = "0.1.0"
