import logging


logger: logging.Logger = logging.getLogger("logo_interpreter")
logger.addHandler(logging.StreamHandler())
# Silent until the host application lowers the level
logger.setLevel(logging.CRITICAL)


# vim: set ts=4 sw=4 expandtab:
