"""Injector configuration"""

import logging
from dotenv import load_dotenv

from .loader import load_raw_config
from .core import Core
from .retrieval import Retrieval
from .injection import Injection

load_dotenv()

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=logging.INFO)
logging.getLogger("httpx").setLevel(logging.WARNING)

_RAW_CONFIG = load_raw_config()

core = Core(_RAW_CONFIG)
retrieval = Retrieval(_RAW_CONFIG)
injection = Injection(_RAW_CONFIG)


class Config:
    core = core
    retrieval = retrieval
    injection = injection


__all__ = ["core", "retrieval", "injection", "Config"]
