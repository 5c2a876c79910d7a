"""datamodgen: author a game data-mod in Python and write it to disk."""

from .model import Mod
from .api import WriteOptions, WriteResult, plan_dry_run, write_mod

__all__ = ["Mod", "WriteOptions", "WriteResult", "plan_dry_run", "write_mod"]

__version__ = "0.3.0"
