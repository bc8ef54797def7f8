import logging

import pytest

from utils import ClassLogger, HybridLogger, OnceInMs, describe_gpio, gpio_to_physical, physical_to_gpio


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_once_in_ms_throttles():
    clock = FakeClock()
    timer = OnceInMs(100, clock=clock)
    assert not timer.should_execute()

    clock.now = 0.05
    assert not timer.should_execute()
    assert timer.elapsed_ms() == pytest.approx(50.0)

    clock.now = 0.1
    assert timer.should_execute()
    assert not timer.should_execute()


def test_gpio_mapping():
    assert gpio_to_physical(18) == 12
    assert physical_to_gpio(23) == 11
    assert gpio_to_physical(40) is None
    assert describe_gpio(11) == "GPIO 11 (pin 23)"
    assert describe_gpio(99) == "GPIO 99 (not on header)"


def test_hybrid_logger_writes_class_tagged_lines(tmp_path):
    hybrid = HybridLogger("easyblink_test", log_dir=str(tmp_path), console_level=logging.WARNING)
    try:
        controller_logger = hybrid.get_class_logger("Controller", logging.INFO)
        controller_logger.info("strip ready")
        controller_logger.debug("hidden below class level")
        controller_logger.create_class_logger("Engine", logging.DEBUG).debug("engine detail")
        log_file = hybrid.log_files[0]
    finally:
        hybrid.cleanup()

    with open(log_file, encoding="utf-8") as f:
        text = f.read()
    assert "[INFO] [Controller] strip ready" in text
    assert "hidden below class level" not in text
    assert "[DEBUG] [Engine] engine detail" in text


def test_class_logger_error_includes_exception_details(tmp_path):
    hybrid = HybridLogger("easyblink_errors", log_dir=str(tmp_path), console_level=logging.CRITICAL)
    try:
        logger = hybrid.get_main_logger()
        try:
            raise RuntimeError("bus fault")
        except RuntimeError as e:
            logger.error("write failed", exception=e)
        log_file = hybrid.log_files[0]
    finally:
        hybrid.cleanup()

    with open(log_file, encoding="utf-8") as f:
        text = f.read()
    assert "[ERROR] [Main] write failed | Type: RuntimeError" in text


def test_default_class_logger_uses_shared_logger():
    logger = ClassLogger.default("Thing")
    assert logger.main_logger is logging.getLogger("easyblink")
    assert logger.class_name == "Thing"
