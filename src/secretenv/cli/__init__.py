"""Command line entry points for secretenv."""
