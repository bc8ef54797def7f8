"""
Utilities package - Common utilities for the easyblink system
"""

from .hybrid_logger import HybridLogger, ClassLogger, ColoredFormatter, LOGGER_NAME
from .gpio_utils import gpio_to_physical, physical_to_gpio, describe_gpio, GPIO_TO_PHYSICAL, PHYSICAL_TO_GPIO
from .once_in_ms import OnceInMs

__all__ = [
    'HybridLogger',
    'ClassLogger',
    'ColoredFormatter',
    'LOGGER_NAME',
    'gpio_to_physical',
    'physical_to_gpio',
    'describe_gpio',
    'GPIO_TO_PHYSICAL',
    'PHYSICAL_TO_GPIO',
    'OnceInMs'
]
