"""
Environment Configuration Examples for Request Logger.

Options can come from REQUEST_LOGGER_* variables, a .env file, or a
YAML/JSON file.

Example .env:
    REQUEST_LOGGER_LEVEL=debug
    REQUEST_LOGGER_TRANSPORT=json
    REQUEST_LOGGER_LOG_DETAILS=true
"""

import os
import tempfile

from request_logger import ConfigFileLoader, Logger, load_from_env
from request_logger.core.env_config import describe_options


def example_1_env_vars():
    """Example 1: Environment variables with explicit overrides."""
    print("\n" + "="*60)
    print("EXAMPLE 1: Environment Variables")
    print("="*60 + "\n")

    os.environ["REQUEST_LOGGER_LEVEL"] = "debug"
    os.environ["REQUEST_LOGGER_CONTEXT"] = "Billing"

    options = load_from_env(logDetails=True)
    print(describe_options(options))

    with Logger(options) as logger:
        logger.debug("Loaded from environment")

    del os.environ["REQUEST_LOGGER_LEVEL"]
    del os.environ["REQUEST_LOGGER_CONTEXT"]


def example_2_yaml_file():
    """Example 2: YAML config file."""
    print("\n" + "="*60)
    print("EXAMPLE 2: YAML Config File")
    print("="*60 + "\n")

    path = os.path.join(tempfile.gettempdir(), "request_logger_example.yaml")
    with open(path, 'w', encoding='utf-8') as f:
        f.write(
            "request_logger:\n"
            "  level: warn\n"
            "  transport: console\n"
            "  autoLogging: false\n"
        )

    options = ConfigFileLoader.from_file(path)
    print(describe_options(options))

    with Logger(options) as logger:
        logger.log("Not shown (below warn)")
        logger.warn("Shown")


if __name__ == "__main__":
    example_1_env_vars()
    example_2_yaml_file()

    print("\n" + "="*60)
    print("All examples completed!")
    print("="*60 + "\n")
