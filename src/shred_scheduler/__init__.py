"""Program scheduling and storage addressing for the 6 x 6 training curriculum."""

__version__ = "0.1.0"
