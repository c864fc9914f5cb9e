"""rlz: release configuration resolver and repository URL model."""

__version__ = "0.1.0"
