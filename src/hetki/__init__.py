"""hetki - declarative tmux session manager."""

__version__ = "0.1.0"
__author__ = "hetki contributors"
