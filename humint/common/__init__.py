# Common utilities
from humint.common.config import Config as Config
from humint.common.crypto import CryptoUtils as CryptoUtils
from humint.common.logging_utils import fingerprint as fingerprint
from humint.common.logging_utils import setup_logger as setup_logger
from humint.common.mixins import Configurable as Configurable

__all__ = ["Config", "Configurable", "CryptoUtils", "fingerprint", "setup_logger"]
