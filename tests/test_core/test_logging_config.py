import logging

from shortlyx.core.logging_config import get_logging_config, setup_logging


class TestLoggingConfig:
    def test_level_is_applied(self):
        config = get_logging_config("debug")
        assert config["handlers"]["console"]["level"] == "DEBUG"
        assert config["loggers"]["shortlyx"]["level"] == "DEBUG"

    def test_setup_configures_package_logger(self):
        setup_logging("WARNING")
        assert logging.getLogger("shortlyx").level == logging.WARNING
        setup_logging("INFO")
