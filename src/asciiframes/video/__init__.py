from .video import *
