from sra2otu.config.schema import Settings
from sra2otu.config.load import load_settings

__all__ = ["Settings", "load_settings"]
