from .logger import get_logger  # noqa: F401
