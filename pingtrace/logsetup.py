# pingtrace/logsetup.py
import logging
import sys

LOG_FORMAT = '%(asctime)s - %(module)s - %(funcName)s - %(levelname)s: %(message)s'
HANDLER_NAME = 'pingtrace'


def setup_root_logger(level=logging.INFO, format=LOG_FORMAT):
    root = logging.getLogger()

    # calling twice (tests, repeated CLI runs in one process) must not stack handlers
    for h in list(root.handlers):
        if h.get_name() == HANDLER_NAME:
            root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(format))

    root.addHandler(handler)
    root.setLevel(level)

    return root
