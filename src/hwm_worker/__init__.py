"""hwm-worker core: captcha resolution and failure alerting for the game worker."""

__version__ = "0.2.0"
