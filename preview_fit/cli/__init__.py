from .common import LOG_LEVELS, add_common_cli_arguments, load_preview_config, setup_logging

__all__ = ["LOG_LEVELS", "add_common_cli_arguments", "load_preview_config", "setup_logging"]
