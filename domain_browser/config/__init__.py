from .loader import load_global_config
from .model import Credentials, GlobalConfig

__all__ = ["Credentials", "GlobalConfig", "load_global_config"]
