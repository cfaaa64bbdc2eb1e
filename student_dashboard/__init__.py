"""Student job-application dashboard: REST service and terminal board."""

__version__ = "1.0.0"
