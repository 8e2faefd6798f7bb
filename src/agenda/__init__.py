"""Mi Agenda: a personal contact book served over HTTP."""

__version__ = "0.1.0"
