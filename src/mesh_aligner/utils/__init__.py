from .log_setup import configure_logging  # noqa: F401
