import logging

module_logger = logging.getLogger('gconfig')


def get_logger(suffix: str = '') -> logging.Logger:
    """get a child logger from gconfig, returning the parent logger if suffix is not given."""
    if not suffix:
        return module_logger
    return module_logger.getChild(suffix)
