from .configs import *  # noqa
