"""Operating system boundary (subprocess execution)."""

from rlz.platform.process import ProcessError, run

__all__ = ["ProcessError", "run"]
