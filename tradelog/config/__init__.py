"""Configuration package for the TradeLog service."""

from .settings import AppSettings, load_settings

__all__ = ["AppSettings", "load_settings"]
