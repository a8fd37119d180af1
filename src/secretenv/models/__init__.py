"""Configuration models for secretenv."""
