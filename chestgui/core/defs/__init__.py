from .defs import *  # noqa
